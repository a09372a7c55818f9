"""Formatadores de relatórios."""
from .market_formatter import MarketFormatter

__all__ = ['MarketFormatter']
