#core/factories/infrastructure.py
"""Factory para criar componentes de infraestrutura do mercado."""
from typing import Dict, Any

from config.settings import MarketSettings
from core.contracts.messaging import IMarketEventBus
from core.contracts.registry import IRegistry
from core.entities.company import Company
from core.entities.exchange import Exchange
from core.entities.operator import Operator

from infrastructure.cache.memory import TradeJournal
from infrastructure.messaging.event_bus import LocalEventBus
from infrastructure.registry.memory import InMemoryRegistry


class InfrastructureFactory:
    """Factory para registros, barramento e diário de negócios."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.settings = MarketSettings(config)

    def create_event_bus(self) -> IMarketEventBus:
        """Cria barramento de eventos."""
        return LocalEventBus()

    def create_trade_journal(self, event_bus: IMarketEventBus) -> TradeJournal:
        """Cria o diário de negócios já inscrito no barramento."""
        journal = TradeJournal(max_size=self.settings.journal_size)
        journal.attach(event_bus)
        return journal

    def create_company_registry(self) -> IRegistry[Company]:
        return InMemoryRegistry('empresa', Company)

    def create_exchange_registry(self, event_bus: IMarketEventBus) -> IRegistry[Exchange]:
        """
        Cria o registro de bolsas.
        Cada bolsa nasce com a política configurada para o seu nome (ou a padrão).
        """
        def build_exchange(name: str) -> Exchange:
            return Exchange(name, policy=self.settings.policy_for(name), event_bus=event_bus)

        return InMemoryRegistry('bolsa', build_exchange)

    def create_operator_registry(self) -> IRegistry[Operator]:
        return InMemoryRegistry('operador', Operator)
