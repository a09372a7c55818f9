"""Inicialização do simulador."""
from .system import MarketSystem

__all__ = ['MarketSystem']
