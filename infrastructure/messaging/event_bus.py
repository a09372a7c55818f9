#infrastructure/messaging/event_bus.py
"""Barramento local de eventos de mercado."""
import logging
import threading
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

from core.contracts.messaging import IMarketEventBus

logger = logging.getLogger(__name__)


class LocalEventBus(IMarketEventBus):
    """
    Barramento síncrono em memória.
    Um handler com erro é registrado no log e não interrompe o negócio
    que publicou o evento nem os demais handlers.
    """

    __slots__ = ['handlers', 'lock', 'failures']

    def __init__(self):
        self.handlers: DefaultDict[str, List[Callable[[Any], None]]] = defaultdict(list)
        self.lock = threading.RLock()
        self.failures = 0

    def subscribe(self, event_type: str, handler: Callable[[Any], None]) -> None:
        with self.lock:
            self.handlers[event_type].append(handler)
        logger.debug(f"Handler {_handler_name(handler)} inscrito no evento '{event_type}'")

    def publish(self, event_type: str, data: Any) -> None:
        with self.lock:
            handlers = list(self.handlers.get(event_type, ()))

        for handler in handlers:
            try:
                handler(data)
            except Exception as e:
                with self.lock:
                    self.failures += 1
                logger.error(
                    f"Erro no handler {_handler_name(handler)} do evento '{event_type}': {e}",
                    exc_info=True
                )

    def unsubscribe(self, event_type: str, handler: Callable[[Any], None]) -> None:
        with self.lock:
            if handler in self.handlers.get(event_type, ()):
                self.handlers[event_type].remove(handler)
                logger.debug(f"Handler {_handler_name(handler)} removido do evento '{event_type}'")

    def handler_count(self, event_type: str) -> int:
        with self.lock:
            return len(self.handlers.get(event_type, ()))


def _handler_name(handler: Callable) -> str:
    return getattr(handler, '__qualname__', getattr(handler, '__name__', repr(handler)))
