#core/entities/guards.py
"""Validações de pré-condição compartilhadas pelas entidades."""
from typing import Any

from core.exceptions import InvalidArgument, InvalidName


def require_name(name: Any, kind: str) -> str:
    """Garante um nome não vazio e não composto apenas de espaços."""
    if not isinstance(name, str):
        raise InvalidName(f"O nome de {kind} deve ser uma string, recebido {type(name).__name__}")
    if not name.strip():
        raise InvalidName(f"O nome de {kind} não pode ser vazio")
    return name


def require_positive(value: Any, what: str) -> int:
    """Garante um inteiro estritamente positivo (bool não conta como inteiro)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{what} deve ser um inteiro, recebido {value!r}")
    if value <= 0:
        raise InvalidArgument(f"{what} deve ser positivo, recebido {value}")
    return value


def require_present(value: Any, what: str) -> Any:
    if value is None:
        raise InvalidArgument(f"{what} não pode ser None")
    return value
