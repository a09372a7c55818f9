# core/bootstrap/system.py
"""
Raiz de composição do simulador: registros, barramento e diário de negócios.
"""
import logging
from typing import Dict, Any, List, Optional

from config.settings import load_config, prepare_config
from core.contracts.messaging import IMarketEventBus
from core.contracts.registry import IRegistry
from core.entities.company import Company
from core.entities.exchange import Exchange, Listing
from core.entities.operator import Operator
from core.factories.infrastructure import InfrastructureFactory
from infrastructure.cache.memory import TradeJournal

logger = logging.getLogger(__name__)


class MarketSystem:
    """
    Uma simulação de mercado independente.

    Cada instância tem um registro por tipo de entidade, de modo que várias
    simulações podem coexistir no mesmo processo sem estado global.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 config_path: Optional[str] = None):
        """
        Args:
            config: Configuração em memória (mesclada com os defaults e validada)
            config_path: Caminho de um YAML; usado apenas se `config` for None
        """
        if config is None and config_path is not None:
            self.config = load_config(config_path)
        else:
            self.config = prepare_config(config)

        factory = InfrastructureFactory(self.config)

        self.event_bus: IMarketEventBus = factory.create_event_bus()
        self.journal: TradeJournal = factory.create_trade_journal(self.event_bus)
        self.company_registry: IRegistry[Company] = factory.create_company_registry()
        self.exchange_registry: IRegistry[Exchange] = factory.create_exchange_registry(self.event_bus)
        self.operator_registry: IRegistry[Operator] = factory.create_operator_registry()

        logger.info(
            f"MarketSystem iniciado - ambiente: {self.config['system'].get('environment')}"
        )

    # Atalhos get-or-create

    def company(self, name: str) -> Company:
        return self.company_registry.get_or_create(name)

    def exchange(self, name: str) -> Exchange:
        return self.exchange_registry.get_or_create(name)

    def operator(self, name: str) -> Operator:
        return self.operator_registry.get_or_create(name)

    # Visões ordenadas por nome

    def companies(self) -> List[Company]:
        return self.company_registry.values()

    def exchanges(self) -> List[Exchange]:
        return self.exchange_registry.values()

    def operators(self) -> List[Operator]:
        return self.operator_registry.values()

    def listings(self) -> List[Listing]:
        """Todas as cotações, em ordem (bolsa, empresa)."""
        return [listing for exchange in self.exchanges() for listing in exchange.listings()]

    def get_stats(self) -> Dict[str, Any]:
        return {
            'companies': len(self.company_registry),
            'exchanges': len(self.exchange_registry),
            'operators': len(self.operator_registry),
            'listings': len(self.listings()),
            'trades': self.journal.get_stats()
        }

    def shutdown(self) -> None:
        """Desliga o diário do barramento; as entidades permanecem consultáveis."""
        self.journal.detach(self.event_bus)
        logger.info(f"MarketSystem encerrado - {self.journal.get_stats()['total_trades']} negócios")
