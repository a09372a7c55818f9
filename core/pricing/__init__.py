"""Políticas de preço das bolsas."""

from .policies import (
    Unchanged,
    ConstantIncrement,
    ConstantDecrement,
    CombinedConstantStep,
    PricingPolicy,
    PricingFunction,
    compute_price,
    describe_policy,
    ensure_policy,
    parse_policy,
    policy_from_step
)

__all__ = [
    'Unchanged',
    'ConstantIncrement',
    'ConstantDecrement',
    'CombinedConstantStep',
    'PricingPolicy',
    'PricingFunction',
    'compute_price',
    'describe_policy',
    'ensure_policy',
    'parse_policy',
    'policy_from_step'
]
