#core/contracts/registry.py
"""Interface para registros de entidades nomeadas."""
from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

T = TypeVar('T')


class IRegistry(ABC, Generic[T]):
    """
    Registro get-or-create indexado por nome único.
    Garante uma única instância canônica por nome durante a execução.
    """

    @abstractmethod
    def get_or_create(self, name: str) -> T:
        """
        Retorna a instância canônica para o nome, criando-a no primeiro uso.

        Args:
            name: Nome único (não vazio, não composto só de espaços)

        Returns:
            A instância registrada para o nome

        Raises:
            InvalidName: Se o nome for vazio ou só espaços
        """
        pass

    @abstractmethod
    def get(self, name: str) -> T:
        """
        Retorna a instância já registrada.

        Raises:
            NotFound: Se nenhum registro existir para o nome
        """
        pass

    @abstractmethod
    def contains(self, name: str) -> bool:
        """Indica se o nome já foi registrado."""
        pass

    @abstractmethod
    def names(self) -> List[str]:
        """Retorna os nomes registrados em ordem alfabética."""
        pass

    @abstractmethod
    def values(self) -> List[T]:
        """Retorna as instâncias registradas ordenadas por nome."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
