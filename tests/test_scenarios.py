"""Cenários ponta a ponta do mercado."""
import pytest

from core.exceptions import AlreadyListed, InsufficientHoldings
from core.pricing import ConstantDecrement, ConstantIncrement


def test_buy_with_remainder_and_increment(nyse, acme, mario, acme_on_nyse):
    nyse.set_policy(ConstantIncrement(step=2))

    mario.buy_shares(nyse, acme, 55)

    assert mario.budget == 950
    assert acme_on_nyse.available_shares() == 95
    assert acme_on_nyse.unit_price == 12


def test_sell_after_buy_with_decrement(nyse, acme, mario, acme_on_nyse):
    nyse.set_policy(ConstantIncrement(step=2))
    mario.buy_shares(nyse, acme, 55)

    nyse.set_policy(ConstantDecrement(step=5))
    receipt = mario.sell_shares(nyse, acme, 3)

    assert receipt.amount == 36
    assert mario.budget == 986
    assert acme_on_nyse.available_shares() == 98
    assert acme_on_nyse.unit_price == 7


def test_oversell_leaves_state_untouched(nyse, acme, mario, acme_on_nyse):
    mario.buy_shares(nyse, acme, 20)
    budget = mario.budget
    holdings = dict(mario.holdings_view())

    with pytest.raises(InsufficientHoldings):
        mario.sell_shares(nyse, acme, 4)

    assert mario.budget == budget
    assert dict(mario.holdings_view()) == holdings
    assert acme_on_nyse.available_shares() == 98


def test_second_listing_rejected(acme, nyse):
    acme.list_on(nyse, 100, 10)
    with pytest.raises(AlreadyListed):
        acme.list_on(nyse, 100, 10)

    assert nyse.find_listing(acme).available_shares() == 100


def test_decrement_never_goes_below_one(nyse, acme, mario, acme_on_nyse):
    mario.buy_shares(nyse, acme, 1000)
    nyse.set_policy(ConstantDecrement(step=7))

    prices = []
    for _ in range(100):
        mario.sell_shares(nyse, acme, 1)
        prices.append(acme_on_nyse.unit_price)

    assert min(prices) == 1
    assert prices[-1] == 1
    assert acme_on_nyse.available_shares() == 100


def test_conservation_of_shares(system, acme, nyse, mario, acme_on_nyse):
    luigi = system.operator("Luigi")
    luigi.deposit(500)

    mario.buy_shares(nyse, acme, 300)
    luigi.buy_shares(nyse, acme, 200)
    mario.sell_shares(nyse, acme, 10)

    held = sum(acme_on_nyse.holdings_view().values())
    assert held + acme_on_nyse.available_shares() == acme_on_nyse.total_shares
    assert mario.holding_of(acme_on_nyse) == acme_on_nyse.holding_of(mario) == 20
    assert luigi.holding_of(acme_on_nyse) == acme_on_nyse.holding_of(luigi) == 20
