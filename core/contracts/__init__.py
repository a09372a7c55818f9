"""Contratos (interfaces) do domínio."""

from .messaging import IMarketEventBus
from .registry import IRegistry

__all__ = [
    'IMarketEventBus',
    'IRegistry'
]
