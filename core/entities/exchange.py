#core/entities/exchange.py
"""
Entidades Exchange e Listing.

A bolsa é dona exclusiva das suas cotações: só ela altera posições e preço
de uma Listing. O acesso às cotações é sempre feito pelos métodos da bolsa.
"""
from functools import total_ordering
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, TYPE_CHECKING
import threading
import logging

from core.contracts.messaging import IMarketEventBus
from core.entities.guards import require_name, require_positive, require_present
from core.entities.trade import TradeReceipt, TradeSide
from core.exceptions import (
    InvalidArgument,
    InsufficientFunds,
    InsufficientHoldings,
    InsufficientShares,
    NotFound
)
from core.pricing.policies import (
    PricingPolicy,
    Unchanged,
    compute_price,
    describe_policy,
    ensure_policy
)
from core.types.market import ListingCreated, MarketEvent, PolicyChanged

if TYPE_CHECKING:
    from core.entities.company import Company
    from core.entities.operator import Operator

logger = logging.getLogger(__name__)


@total_ordering
class Listing:
    """
    Ações de uma empresa em uma bolsa: total emitido, preço unitário e
    posições por operador.

    Identidade, igualdade e ordenação por (nome da bolsa, nome da empresa).
    Operadores com posição zero nunca aparecem no mapa de posições.
    """

    __slots__ = ['_exchange_name', '_company', '_total_shares', '_unit_price',
                 '_holdings', '_lock']

    def __init__(self, exchange_name: str, company: 'Company',
                 total_shares: int, unit_price: int):
        require_present(company, "A empresa")
        self._exchange_name = exchange_name
        self._company = company
        self._total_shares = require_positive(total_shares, "O número total de ações")
        self._unit_price = require_positive(unit_price, "O preço unitário")
        self._holdings: Dict['Operator', int] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Lock de negociação da cotação (adquirido antes do lock do operador)."""
        return self._lock

    @property
    def exchange_name(self) -> str:
        return self._exchange_name

    @property
    def company(self) -> 'Company':
        return self._company

    @property
    def total_shares(self) -> int:
        return self._total_shares

    @property
    def unit_price(self) -> int:
        return self._unit_price

    def available_shares(self) -> int:
        """Total emitido menos as ações em posse de operadores."""
        with self._lock:
            return self._total_shares - sum(self._holdings.values())

    def holdings_view(self) -> Mapping['Operator', int]:
        """Cópia somente leitura das posições, ordenada por operador."""
        with self._lock:
            return MappingProxyType(dict(sorted(self._holdings.items())))

    def holding_of(self, operator: 'Operator') -> int:
        with self._lock:
            return self._holdings.get(operator, 0)

    # Mutações reservadas à Exchange

    def _apply_holding_delta(self, operator: 'Operator', delta: int) -> None:
        quantity = self._holdings.get(operator, 0) + delta
        if quantity == 0:
            self._holdings.pop(operator, None)
        else:
            self._holdings[operator] = quantity

    def _set_unit_price(self, price: int) -> None:
        self._unit_price = require_positive(price, "O preço unitário")

    def _key(self) -> Tuple[str, str]:
        return (self._exchange_name, self._company.name)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Listing):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: 'Listing') -> bool:
        if not isinstance(other, Listing):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (f"Listing(exchange={self._exchange_name}, company={self._company.name}, "
                f"price={self._unit_price}, total={self._total_shares})")


@total_ordering
class Exchange:
    """
    Bolsa: conjunto de cotações e uma política de preço ativa.

    A política é compartilhada por todas as cotações da bolsa; trocá-la
    afeta apenas negócios futuros.
    """

    __slots__ = ['_name', '_listings', '_policy', '_event_bus', '_lock']

    def __init__(self, name: str, policy: Optional[PricingPolicy] = None,
                 event_bus: Optional[IMarketEventBus] = None):
        self._name = require_name(name, "uma bolsa")
        self._listings: Dict[str, Listing] = {}
        self._policy = ensure_policy(policy if policy is not None else Unchanged())
        self._event_bus = event_bus
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def policy(self) -> PricingPolicy:
        return self._policy

    def set_policy(self, policy: PricingPolicy) -> None:
        """Substitui a política ativa; os preços atuais não são recalculados."""
        policy = ensure_policy(policy)
        with self._lock:
            previous = self._policy
            self._policy = policy

        logger.info(
            f"Bolsa {self._name}: política {describe_policy(previous)} -> {describe_policy(policy)}"
        )
        payload: PolicyChanged = {
            'exchange': self._name,
            'previous': describe_policy(previous),
            'current': describe_policy(policy)
        }
        self._publish(MarketEvent.POLICY_CHANGED, payload)

    def listings(self) -> Tuple[Listing, ...]:
        """Cotações ordenadas por (bolsa, empresa)."""
        with self._lock:
            return tuple(sorted(self._listings.values()))

    def quote(self, company: 'Company', total_shares: int, unit_price: int) -> Listing:
        """
        Cria a cotação de uma empresa com todas as ações disponíveis.

        Chamado apenas por Company.list_on, que garante a unicidade e
        anuncia a cotação com publish_listing depois de liberar seu lock.

        Raises:
            InvalidArgument: Se total de ações ou preço não forem positivos
        """
        listing = Listing(self._name, company, total_shares, unit_price)
        with self._lock:
            self._listings[company.name] = listing

        logger.info(
            f"Bolsa {self._name}: {company.name} cotada com {total_shares} ações a {unit_price}"
        )
        return listing

    def publish_listing(self, listing: Listing) -> None:
        """Publica LISTING_CREATED; chamado sem nenhum lock de entidade."""
        payload: ListingCreated = {
            'exchange': self._name,
            'company': listing.company.name,
            'total_shares': listing.total_shares,
            'unit_price': listing.unit_price
        }
        self._publish(MarketEvent.LISTING_CREATED, payload)

    def find_listing(self, company: 'Company') -> Listing:
        """
        Retorna a cotação da empresa nesta bolsa.

        Raises:
            NotFound: Se a empresa não estiver cotada aqui
        """
        require_present(company, "A empresa")
        with self._lock:
            listing = self._listings.get(company.name)
        if listing is None:
            raise NotFound(f"{company.name} não está cotada na bolsa {self._name}")
        return listing

    def has_listing(self, company: 'Company') -> bool:
        with self._lock:
            return company.name in self._listings

    def buy(self, listing: Listing, operator: 'Operator', quantity: int) -> TradeReceipt:
        """
        Registra a compra de `quantity` ações por `operator` e aplica a política.

        Não movimenta dinheiro nem publica evento: o débito e o
        publish_trade são responsabilidade do operador, depois de liquidar.

        Raises:
            InvalidArgument: Quantidade não positiva ou cotação de outra bolsa
            InsufficientShares: Ações disponíveis menores que a quantidade
            InsufficientFunds: Saldo do operador menor que preço x quantidade
        """
        self._require_own(listing)
        require_present(operator, "O operador")
        require_positive(quantity, "A quantidade")

        with listing.lock:
            available = listing.available_shares()
            if available < quantity:
                raise InsufficientShares(
                    f"{listing.company.name}@{self._name}: {available} ações disponíveis, "
                    f"{quantity} solicitadas"
                )

            price = listing.unit_price
            cost = price * quantity
            if operator.budget < cost:
                raise InsufficientFunds(
                    f"Saldo de {operator.name} ({operator.budget}) insuficiente para "
                    f"{quantity} x {price} = {cost}"
                )

            new_price = compute_price(self._policy, listing, quantity, True)
            listing._apply_holding_delta(operator, quantity)
            listing._set_unit_price(new_price)

        return self._settle(listing, operator, TradeSide.BUY, quantity, price, new_price)

    def sell(self, listing: Listing, operator: 'Operator', quantity: int) -> TradeReceipt:
        """
        Registra a venda de `quantity` ações por `operator` e aplica a política.

        Raises:
            InvalidArgument: Quantidade não positiva ou cotação de outra bolsa
            InsufficientHoldings: Posição do operador menor que a quantidade
        """
        self._require_own(listing)
        require_present(operator, "O operador")
        require_positive(quantity, "A quantidade")

        with listing.lock:
            held = listing.holding_of(operator)
            if held < quantity:
                raise InsufficientHoldings(
                    f"{operator.name} possui {held} ações de {listing.company.name}@{self._name}, "
                    f"venda de {quantity} recusada"
                )

            price = listing.unit_price
            new_price = compute_price(self._policy, listing, quantity, False)
            listing._apply_holding_delta(operator, -quantity)
            listing._set_unit_price(new_price)

        return self._settle(listing, operator, TradeSide.SELL, quantity, price, new_price)

    def _settle(self, listing: Listing, operator: 'Operator', side: TradeSide,
                quantity: int, price: int, new_price: int) -> TradeReceipt:
        receipt = TradeReceipt(
            exchange=self._name,
            company=listing.company.name,
            operator=operator.name,
            side=side,
            quantity=quantity,
            price=price,
            new_price=new_price
        )
        logger.debug(
            f"{side.value} {operator.name} {quantity} {listing.company.name}@{self._name} "
            f"a {price} (novo preço {new_price})"
        )
        return receipt

    def publish_trade(self, receipt: TradeReceipt) -> None:
        """Publica TRADE_EXECUTED para um negócio já liquidado dos dois lados."""
        self._publish(MarketEvent.TRADE_EXECUTED, receipt)

    def _require_own(self, listing: Listing) -> None:
        require_present(listing, "A cotação")
        with self._lock:
            owned = self._listings.get(listing.company.name)
        if owned is not listing:
            raise InvalidArgument(
                f"A cotação {listing.company.name}@{listing.exchange_name} "
                f"não pertence à bolsa {self._name}"
            )

    def _publish(self, event: MarketEvent, data: Any) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event.value, data)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Exchange):
            return NotImplemented
        return self._name == other._name

    def __lt__(self, other: 'Exchange') -> bool:
        if not isinstance(other, Exchange):
            return NotImplemented
        return self._name < other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Exchange(name={self._name}, listings={len(self._listings)}, policy={describe_policy(self._policy)})"
