"""Núcleo do motor de negociação."""
