# infrastructure/registry/memory.py
"""Registro em memória de entidades nomeadas."""
from typing import Callable, Dict, Generic, List, TypeVar
import threading
import logging

from core.contracts.registry import IRegistry
from core.entities.guards import require_name
from core.exceptions import NotFound

logger = logging.getLogger(__name__)

T = TypeVar('T')


class InMemoryRegistry(IRegistry[T], Generic[T]):
    """
    Implementação get-or-create thread-safe.
    Entradas vivem enquanto o registro existir; não há remoção.
    """

    __slots__ = ['kind', 'factory', 'entries', 'lock', 'stats']

    def __init__(self, kind: str, factory: Callable[[str], T]):
        """
        Inicializa o registro.

        Args:
            kind: Descrição do tipo registrado (usada em mensagens)
            factory: Construtor chamado apenas no primeiro pedido de cada nome
        """
        self.kind = kind
        self.factory = factory
        self.entries: Dict[str, T] = {}
        self.lock = threading.RLock()

        self.stats = {
            'hits': 0,
            'creations': 0
        }

        logger.debug(f"InMemoryRegistry de {kind} inicializado")

    def get_or_create(self, name: str) -> T:
        require_name(name, self.kind)

        # Check-then-create atômico por registro
        with self.lock:
            instance = self.entries.get(name)
            if instance is not None:
                self.stats['hits'] += 1
                return instance

            instance = self.factory(name)
            self.entries[name] = instance
            self.stats['creations'] += 1

        logger.info(f"Novo registro de {self.kind}: {name}")
        return instance

    def get(self, name: str) -> T:
        with self.lock:
            instance = self.entries.get(name)
        if instance is None:
            raise NotFound(f"Nenhum registro de {self.kind} com nome '{name}'")
        return instance

    def contains(self, name: str) -> bool:
        with self.lock:
            return name in self.entries

    def names(self) -> List[str]:
        with self.lock:
            return sorted(self.entries)

    def values(self) -> List[T]:
        with self.lock:
            return [self.entries[name] for name in sorted(self.entries)]

    def get_stats(self) -> Dict[str, int]:
        with self.lock:
            return {**self.stats, 'size': len(self.entries)}

    def __len__(self) -> int:
        with self.lock:
            return len(self.entries)

    def __contains__(self, name: object) -> bool:
        with self.lock:
            return name in self.entries
