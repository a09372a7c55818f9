# application/services/session/parser.py
"""
Parser de scripts de sessão de mercado.

Formato (tokens separados por espaço, `#` inicia comentário):

    Acme NYSE 100 10        # <empresa> <bolsa> <ações> <preço>
    --
    Mario 1000              # <operador> <saldo>
    --
    Mario b NYSE Acme 55    # compra gastando até 55
    Mario s NYSE Acme 3     # venda de 3 ações
    Mario d 100             # depósito
    Mario w 50              # saque
"""
from pathlib import Path
from typing import List, Tuple, Union
import logging

from .types import (
    ListingCommand,
    MarketScript,
    OperationCommand,
    OperationKind,
    OperatorCommand,
    ScriptError
)

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "--"


class ScriptParser:
    """Converte texto de script em um MarketScript."""

    __slots__ = []

    def parse_file(self, path: Union[str, Path]) -> MarketScript:
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
        script = self.parse(text)
        logger.info(f"Script {path} carregado: {script.size} comandos")
        return script

    def parse(self, text: str) -> MarketScript:
        """
        Raises:
            ScriptError: Linha malformada (número errado de tokens, inteiro inválido)
        """
        script = MarketScript()
        section = 0

        for line_no, tokens in self._tokenize(text):
            if tokens[0] == SECTION_SEPARATOR:
                section += 1
                if section > 2:
                    raise ScriptError(line_no, "mais de três seções no script")
                continue

            if section == 0:
                script.listings.append(self._parse_listing(line_no, tokens))
            elif section == 1:
                script.operators.append(self._parse_operator(line_no, tokens))
            else:
                script.operations.append(self._parse_operation(line_no, tokens))

        return script

    def _tokenize(self, text: str) -> List[Tuple[int, List[str]]]:
        result = []
        for line_no, raw in enumerate(text.splitlines(), start=1):
            content = raw.split('#', 1)[0].strip()
            if content:
                result.append((line_no, content.split()))
        return result

    def _parse_listing(self, line_no: int, tokens: List[str]) -> ListingCommand:
        self._expect(line_no, tokens, 4, "<empresa> <bolsa> <ações> <preço>")
        return ListingCommand(
            line=line_no,
            company=tokens[0],
            exchange=tokens[1],
            total_shares=self._int(line_no, tokens[2]),
            unit_price=self._int(line_no, tokens[3])
        )

    def _parse_operator(self, line_no: int, tokens: List[str]) -> OperatorCommand:
        self._expect(line_no, tokens, 2, "<operador> <saldo>")
        return OperatorCommand(
            line=line_no,
            operator=tokens[0],
            budget=self._int(line_no, tokens[1])
        )

    def _parse_operation(self, line_no: int, tokens: List[str]) -> OperationCommand:
        if len(tokens) < 2:
            raise ScriptError(line_no, f"operação incompleta: {' '.join(tokens)}")

        try:
            kind = OperationKind(tokens[1])
        except ValueError as e:
            raise ScriptError(line_no, f"operação desconhecida '{tokens[1]}' (use b, s, d ou w)") from e

        if kind in (OperationKind.DEPOSIT, OperationKind.WITHDRAW):
            self._expect(line_no, tokens, 3, "<operador> d|w <valor>")
            return OperationCommand(
                line=line_no,
                operator=tokens[0],
                kind=kind,
                value=self._int(line_no, tokens[2])
            )

        self._expect(line_no, tokens, 5, "<operador> b|s <bolsa> <empresa> <valor>")
        return OperationCommand(
            line=line_no,
            operator=tokens[0],
            kind=kind,
            exchange=tokens[2],
            company=tokens[3],
            value=self._int(line_no, tokens[4])
        )

    @staticmethod
    def _expect(line_no: int, tokens: List[str], count: int, usage: str) -> None:
        if len(tokens) != count:
            raise ScriptError(
                line_no, f"esperados {count} campos ({usage}), encontrados {len(tokens)}"
            )

    @staticmethod
    def _int(line_no: int, token: str) -> int:
        try:
            return int(token)
        except ValueError as e:
            raise ScriptError(line_no, f"inteiro inválido: '{token}'") from e
