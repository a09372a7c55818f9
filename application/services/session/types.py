# application/services/session/types.py
"""Tipos e classes de dados das sessões de script."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.entities.trade import TradeReceipt
from core.exceptions import MarketError


class OperationKind(str, Enum):
    """Operações da terceira seção do script."""
    BUY = "b"
    SELL = "s"
    DEPOSIT = "d"
    WITHDRAW = "w"


class ScriptError(Exception):
    """Erro de script, com o número da linha (base 1) e a causa."""

    def __init__(self, line: int, message: str, cause: Optional[Exception] = None):
        super().__init__(f"linha {line}: {message}")
        self.line = line
        self.cause = cause


@dataclass(frozen=True)
class ListingCommand:
    """`<empresa> <bolsa> <ações> <preço>`"""
    line: int
    company: str
    exchange: str
    total_shares: int
    unit_price: int


@dataclass(frozen=True)
class OperatorCommand:
    """`<operador> <saldo>`"""
    line: int
    operator: str
    budget: int


@dataclass(frozen=True)
class OperationCommand:
    """`<operador> b|s <bolsa> <empresa> <valor>` ou `<operador> d|w <valor>`"""
    line: int
    operator: str
    kind: OperationKind
    value: int
    exchange: Optional[str] = None
    company: Optional[str] = None


@dataclass
class MarketScript:
    """Script completo, nas três seções."""
    listings: List[ListingCommand] = field(default_factory=list)
    operators: List[OperatorCommand] = field(default_factory=list)
    operations: List[OperationCommand] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.listings) + len(self.operators) + len(self.operations)


@dataclass
class SessionResult:
    """Resultado da execução de um script."""
    applied: int = 0
    receipts: List[TradeReceipt] = field(default_factory=list)
    failures: List[ScriptError] = field(default_factory=list)
    listed_companies: List[str] = field(default_factory=list)
    listed_exchanges: List[str] = field(default_factory=list)
    registered_operators: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def failure_causes(self) -> List[MarketError]:
        return [f.cause for f in self.failures if isinstance(f.cause, MarketError)]
