"""Configurações do simulador."""
