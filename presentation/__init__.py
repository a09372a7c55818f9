"""Camada de apresentação."""
