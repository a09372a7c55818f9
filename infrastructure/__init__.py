"""Camada de infraestrutura."""

# Registry
from .registry.memory import InMemoryRegistry

# Cache
from .cache.memory import TradeJournal

# Messaging
from .messaging.event_bus import LocalEventBus

__all__ = [
    'InMemoryRegistry',
    'TradeJournal',
    'LocalEventBus'
]
