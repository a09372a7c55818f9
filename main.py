# main.py
"""
Simulador de Bolsa - executa um script de sessão e exibe os relatórios.

Uso:
    python main.py sessao.txt
    python main.py sessao.txt --report operators --plain
    python main.py sessao.txt --exchange NYSE --policy-step 2 --report prices
"""
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from application.services.session import ScriptError, SessionResult, SessionRunner
from config.settings import ConfigurationError, MarketSettings, load_config
from core.bootstrap.system import MarketSystem
from core.exceptions import MarketError
from core.formatters.market_formatter import MarketFormatter
from core.pricing.policies import describe_policy, policy_from_step
from presentation.display.tables import MarketTables

REPORTS = ('exchanges', 'companies', 'operators', 'prices')


def setup_logging(console: Console, log_dir: Optional[str] = None, level: str = 'INFO') -> None:
    """
    Configura o sistema de logging.

    Sem `log_dir` apenas o console é configurado; a chamada é repetida com
    o diretório da configuração assim que ela é carregada.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_path / "market.log",
            mode='w',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        root_logger.addHandler(file_handler)

    console_handler = RichHandler(
        console=console,
        level=getattr(logging, level, logging.INFO),
        show_time=False,
        markup=False
    )
    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulador de bolsa: executa um script de sessão.")
    parser.add_argument("script", help="Arquivo de script (cotações -- operadores -- operações).")
    parser.add_argument("--config", default="config/config.yaml", help="Arquivo YAML de configuração.")
    parser.add_argument("--report", choices=REPORTS, default="exchanges", help="Relatório exibido ao final.")
    parser.add_argument("--exchange", help="Bolsa alvo de --policy-step e do relatório 'prices'.")
    parser.add_argument("--policy-step", type=int,
                        help="Passo constante de preço para --exchange (>0 sobe, <0 desce, 0 mantém).")
    parser.add_argument("--keep-going", action="store_true",
                        help="Registra falhas e continua em vez de interromper a sessão.")
    parser.add_argument("--plain", action="store_true", help="Relatórios em texto simples.")
    return parser


def render_report(console: Console, system: MarketSystem, result: SessionResult,
                  report: str, exchange_name: Optional[str], plain: bool) -> None:
    """Exibe o relatório pedido, restrito às entidades tocadas pela sessão."""
    formatter = MarketFormatter()
    tables = MarketTables(console=console, formatter=formatter)

    if report == 'exchanges':
        exchanges = [system.exchange(name) for name in result.listed_exchanges]
        if plain:
            console.print(formatter.format_many(formatter.format_exchange(e) for e in exchanges),
                          markup=False, highlight=False)
        else:
            tables.show_exchanges(exchanges)

    elif report == 'companies':
        companies = [system.company(name) for name in result.listed_companies]
        if plain:
            console.print(formatter.format_many(formatter.format_company(c) for c in companies),
                          markup=False, highlight=False)
        else:
            tables.show_companies(companies)

    elif report == 'operators':
        operators = [system.operator(name) for name in result.registered_operators]
        if plain:
            console.print(formatter.format_many(formatter.format_operator(o) for o in operators),
                          markup=False, highlight=False)
        else:
            tables.show_operators(operators)

    elif report == 'prices':
        exchange = system.exchange(exchange_name)
        if plain:
            console.print(formatter.format_prices(exchange), markup=False, highlight=False)
        else:
            tables.show_exchanges([exchange])

    if not plain:
        tables.show_journal(system.journal.get_stats())


def main(argv: Optional[List[str]] = None) -> int:
    """Função principal; retorna o código de saída."""
    args = build_parser().parse_args(argv)
    console = Console()

    if args.policy_step is not None and not args.exchange:
        console.print("[red]❌ --policy-step exige --exchange[/red]")
        return 2
    if args.report == 'prices' and not args.exchange:
        console.print("[red]❌ o relatório 'prices' exige --exchange[/red]")
        return 2

    # Só console até a configuração dizer onde fica o arquivo de log
    setup_logging(console)
    try:
        settings = MarketSettings(load_config(args.config))
    except ConfigurationError as e:
        console.print(f"[red]❌ Configuração inválida:[/red] {e}", highlight=False)
        return 2
    setup_logging(console, settings.log_dir, settings.log_level)

    system = MarketSystem(config_path=args.config)
    try:
        return run_session(console, system, args)
    finally:
        system.shutdown()


def run_session(console: Console, system: MarketSystem, args: argparse.Namespace) -> int:
    """Executa o script e exibe o relatório; retorna o código de saída."""
    try:
        if args.policy_step is not None:
            exchange = system.exchange(args.exchange)
            exchange.set_policy(policy_from_step(args.policy_step))
            console.print(f"[cyan]Política de {exchange.name}: {describe_policy(exchange.policy)}[/cyan]")

        runner = SessionRunner(system, stop_on_error=not args.keep_going)
        result = runner.run_file(args.script)
    except ScriptError as e:
        console.print(f"[red]❌ Erro no script:[/red] {e}", highlight=False)
        return 1
    except MarketError as e:
        console.print(f"[red]❌ {e}[/red]", highlight=False)
        return 1
    except OSError as e:
        console.print(f"[red]❌ Não foi possível ler o script: {e}[/red]", highlight=False)
        return 1

    render_report(console, system, result, args.report, args.exchange, args.plain)

    for failure in result.failures:
        console.print(f"[yellow]⚠️ {failure}[/yellow]", highlight=False)

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
