# presentation/display/tables.py
"""Renderização dos relatórios de mercado com tabelas Rich."""
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from core.entities.company import Company
from core.entities.exchange import Exchange
from core.entities.operator import Operator
from core.formatters.market_formatter import MarketFormatter
from core.pricing.policies import describe_policy
from core.types.market import JournalStats


class MarketTables:
    """Monta tabelas Rich a partir dos resumos do MarketFormatter."""

    def __init__(self, console: Optional[Console] = None,
                 formatter: Optional[MarketFormatter] = None):
        self.console = console or Console()
        self.formatter = formatter or MarketFormatter()

    def exchange_table(self, exchange: Exchange) -> Table:
        table = Table(title=f"🏛️ {exchange.name}", caption=f"política: {describe_policy(exchange.policy)}")
        table.add_column("Empresa", style="bold cyan")
        table.add_column("Preço", justify="right", style="yellow")
        table.add_column("Disponíveis", justify="right")
        table.add_column("Total", justify="right", style="dim")
        table.add_column("Posições")

        for listing in exchange.listings():
            summary = self.formatter.summarize_listing(listing)
            holders = ", ".join(f"{h['operator']}={h['quantity']}" for h in summary['holders'])
            table.add_row(
                summary['company'],
                str(summary['unit_price']),
                str(summary['available_shares']),
                str(summary['total_shares']),
                holders or "-"
            )
        return table

    def operators_table(self, operators: Iterable[Operator]) -> Table:
        table = Table(title="👤 Operadores")
        table.add_column("Operador", style="bold cyan")
        table.add_column("Saldo", justify="right", style="green")
        table.add_column("Valor das ações", justify="right", style="yellow")
        table.add_column("Capital total", justify="right", style="bold")
        table.add_column("Posições")

        for operator in operators:
            summary = self.formatter.summarize_operator(operator)
            positions = ", ".join(
                f"{p['company']}@{p['exchange']}={p['quantity']}" for p in summary['positions']
            )
            table.add_row(
                summary['operator'],
                str(summary['budget']),
                str(summary['value_of_holdings']),
                str(summary['total_capital']),
                positions or "-"
            )
        return table

    def companies_table(self, companies: Iterable[Company]) -> Table:
        table = Table(title="🏢 Empresas")
        table.add_column("Empresa", style="bold cyan")
        table.add_column("Bolsas")
        for company in companies:
            table.add_row(company.name, ", ".join(e.name for e in company.exchanges()) or "-")
        return table

    def journal_table(self, stats: JournalStats) -> Table:
        table = Table(title="📊 Negócios")
        table.add_column("Métrica", style="bold")
        table.add_column("Valor", justify="right")
        table.add_row("Negócios", str(stats['total_trades']))
        table.add_row("Compras", str(stats['buys']))
        table.add_row("Vendas", str(stats['sells']))
        table.add_row("Ações negociadas", str(stats['shares_traded']))
        table.add_row("Volume financeiro", str(stats['turnover']))
        for exchange, count in stats['by_exchange'].items():
            table.add_row(f"  {exchange}", str(count))
        return table

    def show_exchanges(self, exchanges: Iterable[Exchange]) -> None:
        for exchange in exchanges:
            self.console.print(self.exchange_table(exchange))

    def show_operators(self, operators: Iterable[Operator]) -> None:
        self.console.print(self.operators_table(operators))

    def show_companies(self, companies: Iterable[Company]) -> None:
        self.console.print(self.companies_table(companies))

    def show_journal(self, stats: JournalStats) -> None:
        self.console.print(self.journal_table(stats))
