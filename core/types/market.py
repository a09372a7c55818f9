#core/types/market.py
"""Tipos e eventos do motor de negociação."""
from enum import Enum
from typing import Dict, List, TypedDict


class MarketEvent(str, Enum):
    """Eventos publicados pelas bolsas."""
    LISTING_CREATED = "LISTING_CREATED"
    POLICY_CHANGED = "POLICY_CHANGED"
    TRADE_EXECUTED = "TRADE_EXECUTED"


class ListingCreated(TypedDict):
    """Payload de LISTING_CREATED."""
    exchange: str
    company: str
    total_shares: int
    unit_price: int


class PolicyChanged(TypedDict):
    """Payload de POLICY_CHANGED."""
    exchange: str
    previous: str
    current: str


class HolderLine(TypedDict):
    """Posição de um operador em uma cotação."""
    operator: str
    quantity: int


class ListingSummary(TypedDict):
    """Resumo de uma cotação para relatórios."""
    exchange: str
    company: str
    total_shares: int
    available_shares: int
    unit_price: int
    holders: List[HolderLine]


class PositionLine(TypedDict):
    """Posição de um operador, vista pelo lado do operador."""
    exchange: str
    company: str
    quantity: int
    unit_price: int
    value: int


class OperatorSummary(TypedDict):
    """Resumo de um operador para relatórios."""
    operator: str
    budget: int
    value_of_holdings: int
    total_capital: int
    positions: List[PositionLine]


class JournalStats(TypedDict):
    """Estatísticas do diário de negócios."""
    total_trades: int
    buys: int
    sells: int
    shares_traded: int
    turnover: int
    by_exchange: Dict[str, int]
