"""Testes de concorrência: sem sobre-venda, sem registros duplicados."""
import threading
from concurrent.futures import ThreadPoolExecutor

from core.exceptions import InsufficientShares, MarketError
from core.pricing import CombinedConstantStep


def test_concurrent_buyers_never_oversell(system, acme, nyse, acme_on_nyse):
    operators = [system.operator(f"op{i}") for i in range(8)]
    for operator in operators:
        operator.deposit(10_000)

    def buy_until_sold_out(operator):
        bought = 0
        while True:
            try:
                bought += operator.buy_shares(nyse, acme, 10).quantity
            except InsufficientShares:
                return bought

    with ThreadPoolExecutor(max_workers=8) as pool:
        bought = list(pool.map(buy_until_sold_out, operators))

    assert sum(bought) == 100
    assert acme_on_nyse.available_shares() == 0
    for operator, quantity in zip(operators, bought):
        assert operator.holding_of(acme_on_nyse) == quantity
        assert operator.budget == 10_000 - 10 * quantity


def test_concurrent_trades_keep_books_consistent(system, acme, nyse, acme_on_nyse):
    nyse.set_policy(CombinedConstantStep(increment=1, decrement=1))
    operators = [system.operator(f"op{i}") for i in range(4)]
    for operator in operators:
        operator.deposit(100_000)

    def trade(operator):
        for _ in range(50):
            try:
                operator.buy_shares(nyse, acme, 40)
                operator.sell_shares(nyse, acme, 1)
            except MarketError:
                pass

    threads = [threading.Thread(target=trade, args=(op,)) for op in operators]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    held = sum(acme_on_nyse.holdings_view().values())
    assert held + acme_on_nyse.available_shares() == 100
    for operator in operators:
        assert operator.holding_of(acme_on_nyse) == acme_on_nyse.holding_of(operator)
    assert acme_on_nyse.unit_price >= 1


def test_registry_creates_single_instance_under_contention(system):
    barrier = threading.Barrier(16)

    def fetch(_):
        barrier.wait()
        return system.operator("Mario")

    with ThreadPoolExecutor(max_workers=16) as pool:
        instances = list(pool.map(fetch, range(16)))

    assert all(instance is instances[0] for instance in instances)
    assert len(system.operators()) == 1


def test_concurrent_listing_only_one_wins(system, acme):
    exchange = system.exchange("NYSE")
    barrier = threading.Barrier(8)
    errors = []

    def list_once(_):
        barrier.wait()
        try:
            acme.list_on(exchange, 100, 10)
        except MarketError as e:
            errors.append(e)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(list_once, range(8)))

    assert len(errors) == 7
    assert len(exchange.listings()) == 1
