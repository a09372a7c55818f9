#core/contracts/messaging.py
"""Interface para o barramento de eventos de mercado."""
from abc import ABC, abstractmethod
from typing import Callable, Any


class IMarketEventBus(ABC):
    """Interface para publicação de eventos das bolsas (cotações, negócios, políticas)."""

    @abstractmethod
    def subscribe(self, event_type: str, handler: Callable[[Any], None]) -> None:
        """Inscreve um handler para um tipo de evento."""
        pass

    @abstractmethod
    def publish(self, event_type: str, data: Any) -> None:
        """Entrega o evento a todos os assinantes, na ordem de inscrição."""
        pass

    @abstractmethod
    def unsubscribe(self, event_type: str, handler: Callable[[Any], None]) -> None:
        """Remove a inscrição de um handler."""
        pass

    @abstractmethod
    def handler_count(self, event_type: str) -> int:
        """Número de handlers inscritos no evento."""
        pass
