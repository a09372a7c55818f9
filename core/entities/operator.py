#core/entities/operator.py
"""Entidade Operator - participante com saldo e posições em ações."""
from functools import total_ordering
from types import MappingProxyType
from typing import Any, Dict, Mapping
import threading
import logging

from core.entities.company import Company
from core.entities.exchange import Exchange, Listing
from core.entities.guards import require_name, require_positive, require_present
from core.entities.trade import TradeReceipt
from core.exceptions import InsufficientFunds

logger = logging.getLogger(__name__)


@total_ordering
class Operator:
    """
    Operador de mercado: saldo em dinheiro e quantidade por cotação.

    Ordem de locks em um negócio: cotação primeiro, operador depois.
    O mapa de posições do operador anda junto com o da bolsa, que é a
    fonte da verdade nas validações de venda.
    """

    __slots__ = ['_name', '_budget', '_holdings', '_lock']

    def __init__(self, name: str):
        self._name = require_name(name, "um operador")
        self._budget = 0
        self._holdings: Dict[Listing, int] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def budget(self) -> int:
        return self._budget

    def holdings_view(self) -> Mapping[Listing, int]:
        """Cópia somente leitura das posições, ordenada por (bolsa, empresa)."""
        with self._lock:
            return MappingProxyType(dict(sorted(self._holdings.items())))

    def holding_of(self, listing: Listing) -> int:
        with self._lock:
            return self._holdings.get(listing, 0)

    def deposit(self, amount: int) -> None:
        """Credita `amount` no saldo."""
        require_positive(amount, "O valor do depósito")
        with self._lock:
            self._budget += amount
        logger.debug(f"{self._name}: depósito de {amount}, saldo {self._budget}")

    def withdraw(self, amount: int) -> None:
        """
        Debita `amount` do saldo.

        Raises:
            InvalidArgument: Se o valor não for positivo
            InsufficientFunds: Se o saldo for menor que o valor
        """
        require_positive(amount, "O valor do saque")
        with self._lock:
            if self._budget < amount:
                raise InsufficientFunds(
                    f"Saldo de {self._name} ({self._budget}) insuficiente para saque de {amount}"
                )
            self._budget -= amount
        logger.debug(f"{self._name}: saque de {amount}, saldo {self._budget}")

    def buy_shares(self, exchange: Exchange, company: Company, total_price: int) -> TradeReceipt:
        """
        Compra ações gastando até `total_price`.

        A quantidade é `total_price // preço atual`; o resto da divisão fica
        no saldo. Uma quantidade zero é recusada pela bolsa.

        Returns:
            Comprovante do negócio (preço liquidado = preço antes do ajuste)
        """
        require_present(exchange, "A bolsa")
        require_present(company, "A empresa")
        require_positive(total_price, "O valor da compra")

        listing = exchange.find_listing(company)
        with listing.lock, self._lock:
            quantity = total_price // listing.unit_price
            receipt = exchange.buy(listing, self, quantity)
            self._budget -= receipt.amount
            self._apply_holding_delta(listing, receipt.quantity)

        # Fora dos locks: assinantes veem o negócio completo
        exchange.publish_trade(receipt)
        return receipt

    def sell_shares(self, exchange: Exchange, company: Company, quantity: int) -> TradeReceipt:
        """
        Vende `quantity` ações ao preço vigente antes do ajuste da política.

        Returns:
            Comprovante do negócio
        """
        require_present(exchange, "A bolsa")
        require_present(company, "A empresa")
        require_positive(quantity, "A quantidade a vender")

        listing = exchange.find_listing(company)
        with listing.lock, self._lock:
            receipt = exchange.sell(listing, self, quantity)
            self._budget += receipt.amount
            self._apply_holding_delta(listing, -receipt.quantity)

        exchange.publish_trade(receipt)
        return receipt

    def value_of_holdings(self) -> int:
        """Valor de mercado das posições aos preços atuais."""
        with self._lock:
            return sum(listing.unit_price * quantity for listing, quantity in self._holdings.items())

    def total_capital(self) -> int:
        """Saldo mais valor de mercado das posições."""
        with self._lock:
            return self._budget + self.value_of_holdings()

    def _apply_holding_delta(self, listing: Listing, delta: int) -> None:
        quantity = self._holdings.get(listing, 0) + delta
        if quantity == 0:
            self._holdings.pop(listing, None)
        else:
            self._holdings[listing] = quantity

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Operator):
            return NotImplemented
        return self._name == other._name

    def __lt__(self, other: 'Operator') -> bool:
        if not isinstance(other, Operator):
            return NotImplemented
        return self._name < other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Operator(name={self._name}, budget={self._budget})"
