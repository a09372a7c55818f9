#core/types/init.py
"""
Tipos customizados para o motor de negociação.
TypedDict e enums que não são entidades.
"""

from .market import (
    MarketEvent,
    ListingCreated,
    PolicyChanged,
    HolderLine,
    ListingSummary,
    PositionLine,
    OperatorSummary,
    JournalStats
)

__all__ = [
    'MarketEvent',
    'ListingCreated',
    'PolicyChanged',
    'HolderLine',
    'ListingSummary',
    'PositionLine',
    'OperatorSummary',
    'JournalStats'
]
