#core/entities/trade.py
"""Entidade TradeReceipt - comprovante de um negócio liquidado."""
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class TradeSide(str, Enum):
    """Lado do negócio, do ponto de vista do operador."""
    BUY = "BUY"
    SELL = "SELL"


class TradeReceipt(BaseModel):
    """
    Representa um negócio executado em uma cotação.

    `price` é o preço unitário efetivamente pago/recebido (anterior ao ajuste
    da política); `new_price` é o preço que vale a partir do próximo negócio.
    """
    model_config = ConfigDict(frozen=True)

    exchange: str
    company: str
    operator: str
    side: TradeSide
    quantity: int = Field(gt=0, description="Ações negociadas")
    price: int = Field(gt=0, description="Preço unitário liquidado")
    new_price: int = Field(gt=0, description="Preço após a política")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def amount(self) -> int:
        """Valor financeiro do negócio."""
        return self.price * self.quantity

    @property
    def is_buy(self) -> bool:
        return self.side == TradeSide.BUY
