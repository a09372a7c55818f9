"""
Configuração do pytest e fixtures compartilhadas do simulador.
"""
import pytest

from core.bootstrap.system import MarketSystem
from core.entities import Company, Exchange, Operator
from core.types.market import MarketEvent


@pytest.fixture
def system():
    """Simulação isolada com configuração padrão (política unchanged)."""
    market = MarketSystem(config={})
    yield market
    market.shutdown()


@pytest.fixture
def acme(system) -> Company:
    return system.company("Acme")


@pytest.fixture
def nyse(system) -> Exchange:
    return system.exchange("NYSE")


@pytest.fixture
def mario(system) -> Operator:
    operator = system.operator("Mario")
    operator.deposit(1000)
    return operator


@pytest.fixture
def acme_on_nyse(acme, nyse):
    """Acme cotada na NYSE com 100 ações a 10."""
    acme.list_on(nyse, 100, 10)
    return nyse.find_listing(acme)


class EventRecorder:
    """Captura os eventos publicados no barramento, por tipo."""

    def __init__(self, event_bus):
        self.events = []
        for event in MarketEvent:
            event_bus.subscribe(event.value, lambda data, name=event.value: self.events.append((name, data)))

    def of(self, event: MarketEvent):
        return [data for name, data in self.events if name == event.value]


@pytest.fixture
def recorder(system) -> EventRecorder:
    return EventRecorder(system.event_bus)
