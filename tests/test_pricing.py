"""Testes das políticas de preço."""
import pytest
from pydantic import ValidationError

from core.exceptions import InvalidArgument
from core.pricing import (
    CombinedConstantStep,
    ConstantDecrement,
    ConstantIncrement,
    Unchanged,
    compute_price,
    describe_policy,
    ensure_policy,
    parse_policy,
    policy_from_step
)


class TestVariants:

    def test_unchanged_keeps_price(self, acme_on_nyse):
        assert compute_price(Unchanged(), acme_on_nyse, 5, True) == 10
        assert compute_price(Unchanged(), acme_on_nyse, 5, False) == 10

    def test_constant_increment_only_on_buy(self, acme_on_nyse):
        policy = ConstantIncrement(step=2)
        assert compute_price(policy, acme_on_nyse, 5, True) == 12
        assert compute_price(policy, acme_on_nyse, 5, False) == 10

    def test_constant_decrement_only_on_sell(self, acme_on_nyse):
        policy = ConstantDecrement(step=3)
        assert compute_price(policy, acme_on_nyse, 1, True) == 10
        assert compute_price(policy, acme_on_nyse, 1, False) == 7

    def test_decrement_floors_at_one(self, acme_on_nyse):
        assert compute_price(ConstantDecrement(step=50), acme_on_nyse, 1, False) == 1

    def test_combined_step(self, acme_on_nyse):
        policy = CombinedConstantStep(increment=4, decrement=9)
        assert compute_price(policy, acme_on_nyse, 1, True) == 14
        assert compute_price(policy, acme_on_nyse, 1, False) == 1

    def test_quantity_does_not_affect_constant_steps(self, acme_on_nyse):
        policy = ConstantIncrement(step=2)
        assert compute_price(policy, acme_on_nyse, 1, True) == compute_price(policy, acme_on_nyse, 90, True)

    def test_method_delegates_to_compute_price(self, acme_on_nyse):
        assert ConstantIncrement(step=1).compute_price(acme_on_nyse, 1, True) == 11

    @pytest.mark.parametrize("factory", [
        lambda: ConstantIncrement(step=0),
        lambda: ConstantDecrement(step=-1),
        lambda: CombinedConstantStep(increment=1, decrement=0),
    ])
    def test_non_positive_steps_rejected(self, factory):
        with pytest.raises(InvalidArgument):
            factory()

    def test_policies_are_immutable_values(self):
        policy = ConstantIncrement(step=2)
        assert policy == ConstantIncrement(step=2)
        assert ConstantIncrement.model_config['frozen'] is True
        with pytest.raises(ValidationError):
            policy.step = 5


class TestInjectedPolicies:

    def test_callable_policy(self, acme_on_nyse):
        def by_quantity(listing, quantity, is_buy):
            return listing.unit_price + quantity if is_buy else listing.unit_price

        assert compute_price(by_quantity, acme_on_nyse, 7, True) == 17
        assert describe_policy(by_quantity) == "by_quantity"

    @pytest.mark.parametrize("bad_price", [0, -3, 2.5, None, True])
    def test_invalid_result_rejected(self, acme_on_nyse, bad_price):
        with pytest.raises(InvalidArgument):
            compute_price(lambda listing, quantity, is_buy: bad_price, acme_on_nyse, 1, True)

    def test_ensure_policy(self):
        with pytest.raises(InvalidArgument):
            ensure_policy(None)
        with pytest.raises(InvalidArgument):
            ensure_policy("constant_increment")
        policy = Unchanged()
        assert ensure_policy(policy) is policy


class TestConstruction:

    def test_parse_policy(self):
        assert parse_policy({'kind': 'unchanged'}) == Unchanged()
        assert parse_policy({'kind': 'constant_increment', 'step': 2}) == ConstantIncrement(step=2)
        assert parse_policy({'kind': 'constant_decrement', 'step': 5}) == ConstantDecrement(step=5)
        assert parse_policy(
            {'kind': 'combined_constant_step', 'increment': 2, 'decrement': 1}
        ) == CombinedConstantStep(increment=2, decrement=1)

    @pytest.mark.parametrize("spec", [
        {'kind': 'random_walk'},
        {'kind': 'constant_increment'},
        {'kind': 'constant_decrement', 'step': 0},
        {'step': 2},
        "unchanged",
        None,
    ])
    def test_parse_policy_rejects_invalid(self, spec):
        with pytest.raises(InvalidArgument):
            parse_policy(spec)

    def test_policy_from_step(self):
        assert policy_from_step(3) == ConstantIncrement(step=3)
        assert policy_from_step(-4) == ConstantDecrement(step=4)
        assert policy_from_step(0) == Unchanged()

    def test_describe_policy(self):
        assert describe_policy(Unchanged()) == "unchanged"
        assert describe_policy(ConstantIncrement(step=2)) == "constant_increment(+2)"
        assert describe_policy(CombinedConstantStep(increment=2, decrement=1)) == \
            "combined_constant_step(+2/-1)"
