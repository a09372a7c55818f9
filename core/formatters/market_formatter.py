#core/formatters/market_formatter.py
"""Formatador de relatórios de texto do mercado."""
from typing import Iterable

from core.entities.company import Company
from core.entities.exchange import Exchange, Listing
from core.entities.operator import Operator
from core.types.market import ListingSummary, OperatorSummary


class MarketFormatter:
    """Converte entidades em resumos estruturados e relatórios de texto."""

    __slots__ = []  # Sem estado

    # ═══════════════════════════════════════════════════════════════
    # RESUMOS ESTRUTURADOS
    # ═══════════════════════════════════════════════════════════════

    def summarize_listing(self, listing: Listing) -> ListingSummary:
        return {
            'exchange': listing.exchange_name,
            'company': listing.company.name,
            'total_shares': listing.total_shares,
            'available_shares': listing.available_shares(),
            'unit_price': listing.unit_price,
            'holders': [
                {'operator': operator.name, 'quantity': quantity}
                for operator, quantity in listing.holdings_view().items()
            ]
        }

    def summarize_operator(self, operator: Operator) -> OperatorSummary:
        positions = [
            {
                'exchange': listing.exchange_name,
                'company': listing.company.name,
                'quantity': quantity,
                'unit_price': listing.unit_price,
                'value': listing.unit_price * quantity
            }
            for listing, quantity in operator.holdings_view().items()
        ]
        value = sum(p['value'] for p in positions)
        return {
            'operator': operator.name,
            'budget': operator.budget,
            'value_of_holdings': value,
            'total_capital': operator.budget + value,
            'positions': positions
        }

    # ═══════════════════════════════════════════════════════════════
    # RELATÓRIOS DE TEXTO
    # ═══════════════════════════════════════════════════════════════

    def format_exchange(self, exchange: Exchange) -> str:
        """
        Bolsa com disponibilidade por cotação e posições por operador:

            NYSE
            - Acme 95
            = Mario 5
        """
        lines = [exchange.name]
        for listing in exchange.listings():
            summary = self.summarize_listing(listing)
            lines.append(f"- {summary['company']} {summary['available_shares']}")
            for holder in summary['holders']:
                lines.append(f"= {holder['operator']} {holder['quantity']}")
        return "\n".join(lines)

    def format_company(self, company: Company) -> str:
        """Empresa seguida das bolsas onde está cotada."""
        lines = [company.name]
        lines.extend(f"- {exchange.name}" for exchange in company.exchanges())
        return "\n".join(lines)

    def format_operator(self, operator: Operator) -> str:
        """
        Operador com saldo, valor das posições e cada posição:

            Mario, 950, 60
            - NYSE, Acme, 5
        """
        summary = self.summarize_operator(operator)
        lines = [f"{summary['operator']}, {summary['budget']}, {summary['value_of_holdings']}"]
        for position in summary['positions']:
            lines.append(f"- {position['exchange']}, {position['company']}, {position['quantity']}")
        return "\n".join(lines)

    def format_prices(self, exchange: Exchange) -> str:
        """Preço atual de cada empresa cotada na bolsa."""
        return "\n".join(
            f"{listing.company.name}, {listing.unit_price}" for listing in exchange.listings()
        )

    def format_listing_names(self, exchange: Exchange) -> str:
        """Bolsa seguida dos nomes das empresas cotadas."""
        lines = [exchange.name]
        lines.extend(f"- {listing.company.name}" for listing in exchange.listings())
        return "\n".join(lines)

    def format_names(self, names: Iterable[str]) -> str:
        return "\n".join(sorted(names))

    def format_many(self, blocks: Iterable[str]) -> str:
        """Junta relatórios separados por linha em branco."""
        return "\n\n".join(block for block in blocks if block)
