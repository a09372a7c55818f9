"""Sessões de mercado dirigidas por script."""
from .parser import ScriptParser
from .runner import SessionRunner
from .types import (
    ListingCommand,
    MarketScript,
    OperationCommand,
    OperationKind,
    OperatorCommand,
    ScriptError,
    SessionResult
)

__all__ = [
    'ScriptParser',
    'SessionRunner',
    'ListingCommand',
    'MarketScript',
    'OperationCommand',
    'OperationKind',
    'OperatorCommand',
    'ScriptError',
    'SessionResult'
]
