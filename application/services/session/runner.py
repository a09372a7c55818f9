# application/services/session/runner.py
"""Executa scripts de sessão sobre um MarketSystem."""
from pathlib import Path
from typing import Callable, Optional, Union
import logging

from core.bootstrap.system import MarketSystem
from core.entities.trade import TradeReceipt
from core.exceptions import MarketError

from .parser import ScriptParser
from .types import (
    ListingCommand,
    MarketScript,
    OperationCommand,
    OperationKind,
    OperatorCommand,
    ScriptError,
    SessionResult
)

logger = logging.getLogger(__name__)


class SessionRunner:
    """
    Aplica as três seções de um script: cotações, operadores e operações.

    Com `stop_on_error=True` a primeira falha de domínio interrompe a sessão
    com ScriptError; caso contrário a falha é registrada e a linha ignorada.
    """

    def __init__(self, system: MarketSystem, stop_on_error: bool = True,
                 parser: Optional[ScriptParser] = None):
        self.system = system
        self.stop_on_error = stop_on_error
        self.parser = parser or ScriptParser()

    def run_file(self, path: Union[str, Path]) -> SessionResult:
        return self.run(self.parser.parse_file(path))

    def run_text(self, text: str) -> SessionResult:
        return self.run(self.parser.parse(text))

    def run(self, script: MarketScript) -> SessionResult:
        result = SessionResult()
        companies, exchanges, operators = set(), set(), set()

        for command in script.listings:
            if self._apply(result, command.line, lambda c=command: self._list(c)):
                companies.add(command.company)
                exchanges.add(command.exchange)

        for command in script.operators:
            if self._apply(result, command.line, lambda c=command: self._register(c)):
                operators.add(command.operator)

        for command in script.operations:
            self._apply(result, command.line, lambda c=command: self._operate(c, result))

        result.listed_companies = sorted(companies)
        result.listed_exchanges = sorted(exchanges)
        result.registered_operators = sorted(operators)

        logger.info(
            f"Sessão concluída: {result.applied} comandos aplicados, "
            f"{len(result.receipts)} negócios, {len(result.failures)} falhas"
        )
        return result

    def _apply(self, result: SessionResult, line: int, action: Callable[[], None]) -> bool:
        try:
            action()
        except MarketError as e:
            error = ScriptError(line, str(e), cause=e)
            if self.stop_on_error:
                raise error from e
            logger.warning(f"Operação ignorada - {error}")
            result.failures.append(error)
            return False

        result.applied += 1
        return True

    def _list(self, command: ListingCommand) -> None:
        company = self.system.company(command.company)
        exchange = self.system.exchange(command.exchange)
        company.list_on(exchange, command.total_shares, command.unit_price)

    def _register(self, command: OperatorCommand) -> None:
        self.system.operator(command.operator).deposit(command.budget)

    def _operate(self, command: OperationCommand, result: SessionResult) -> None:
        operator = self.system.operator(command.operator)

        if command.kind == OperationKind.DEPOSIT:
            operator.deposit(command.value)
            return
        if command.kind == OperationKind.WITHDRAW:
            operator.withdraw(command.value)
            return

        exchange = self.system.exchange(command.exchange)
        company = self.system.company(command.company)

        receipt: TradeReceipt
        if command.kind == OperationKind.BUY:
            receipt = operator.buy_shares(exchange, company, command.value)
        else:
            receipt = operator.sell_shares(exchange, company, command.value)
        result.receipts.append(receipt)
