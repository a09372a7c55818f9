#core/entities/init.py
"""
Entidades do domínio - representam conceitos do mercado.
Company, Exchange e Operator são únicos por nome; Listing pertence à sua Exchange.
"""

from .trade import TradeReceipt, TradeSide
from .exchange import Exchange, Listing
from .company import Company
from .operator import Operator

__all__ = [
    'TradeReceipt', 'TradeSide',
    'Exchange', 'Listing',
    'Company',
    'Operator'
]
