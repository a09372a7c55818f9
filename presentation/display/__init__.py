"""Exibição de relatórios."""
from .tables import MarketTables

__all__ = ['MarketTables']
