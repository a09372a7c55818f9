#core/entities/company.py
"""Entidade Company - empresa que pode ser cotada em bolsas."""
from functools import total_ordering
from typing import Any, Set, Tuple
import threading
import logging

from core.entities.exchange import Exchange
from core.entities.guards import require_name, require_positive, require_present
from core.exceptions import AlreadyListed

logger = logging.getLogger(__name__)


@total_ordering
class Company:
    """Empresa identificada pelo nome, com o conjunto de bolsas onde está cotada."""

    __slots__ = ['_name', '_exchanges', '_lock']

    def __init__(self, name: str):
        self._name = require_name(name, "uma empresa")
        self._exchanges: Set[Exchange] = set()
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    def exchanges(self) -> Tuple[Exchange, ...]:
        """Bolsas onde a empresa está cotada, ordenadas por nome."""
        with self._lock:
            return tuple(sorted(self._exchanges))

    def is_listed_on(self, exchange: Exchange) -> bool:
        with self._lock:
            return exchange in self._exchanges

    def list_on(self, exchange: Exchange, total_shares: int, unit_price: int) -> None:
        """
        Cota a empresa em uma bolsa.

        Único caminho de criação de uma Listing.

        Args:
            exchange: Bolsa de destino
            total_shares: Ações emitidas (> 0)
            unit_price: Preço unitário inicial (> 0)

        Raises:
            InvalidArgument: Se total de ações ou preço não forem positivos
            AlreadyListed: Se a empresa já estiver cotada nesta bolsa
        """
        require_present(exchange, "A bolsa")
        require_positive(total_shares, "O número total de ações")
        require_positive(unit_price, "O preço unitário")

        with self._lock:
            if exchange in self._exchanges:
                raise AlreadyListed(
                    f"A empresa {self._name} já está cotada na bolsa {exchange.name}"
                )
            listing = exchange.quote(self, total_shares, unit_price)
            self._exchanges.add(exchange)

        # Assinantes só veem a cotação já registrada dos dois lados
        exchange.publish_listing(listing)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Company):
            return NotImplemented
        return self._name == other._name

    def __lt__(self, other: 'Company') -> bool:
        if not isinstance(other, Company):
            return NotImplemented
        return self._name < other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Company(name={self._name})"
