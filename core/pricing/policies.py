#core/pricing/policies.py
"""
Políticas de preço aplicadas pela bolsa após cada negócio.

Cada variante é um modelo imutável (frozen) com um discriminador `kind`;
a avaliação fica em uma função por variante, despachada por `compute_price`.
Funções puras com assinatura (listing, quantity, is_buy) -> int também são
aceitas como política injetada.
"""
from typing import Annotated, Any, Callable, Dict, Literal, TYPE_CHECKING, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from core.exceptions import InvalidArgument

if TYPE_CHECKING:
    from core.entities.exchange import Listing


class _PolicyModel(BaseModel):
    """Base das variantes: converte erros de validação em InvalidArgument."""

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidArgument(
                f"Parâmetros inválidos para {type(self).__name__}: {_first_error(e)}"
            ) from e

    def compute_price(self, listing: 'Listing', quantity: int, is_buy: bool) -> int:
        """Novo preço unitário da cotação após um negócio."""
        return compute_price(self, listing, quantity, is_buy)


class Unchanged(_PolicyModel):
    """Preço invariável."""
    kind: Literal['unchanged'] = 'unchanged'

    def __str__(self) -> str:
        return "unchanged"


class ConstantIncrement(_PolicyModel):
    """Soma `step` ao preço a cada compra; vendas não alteram o preço."""
    kind: Literal['constant_increment'] = 'constant_increment'
    step: int = Field(gt=0, description="Incremento por compra")

    def __str__(self) -> str:
        return f"constant_increment(+{self.step})"


class ConstantDecrement(_PolicyModel):
    """Subtrai `step` do preço a cada venda, sem descer abaixo de 1."""
    kind: Literal['constant_decrement'] = 'constant_decrement'
    step: int = Field(gt=0, description="Decremento por venda")

    def __str__(self) -> str:
        return f"constant_decrement(-{self.step})"


class CombinedConstantStep(_PolicyModel):
    """Incremento na compra e decremento na venda."""
    kind: Literal['combined_constant_step'] = 'combined_constant_step'
    increment: int = Field(gt=0, description="Incremento por compra")
    decrement: int = Field(gt=0, description="Decremento por venda")

    def __str__(self) -> str:
        return f"combined_constant_step(+{self.increment}/-{self.decrement})"


PolicyVariant = Annotated[
    Union[Unchanged, ConstantIncrement, ConstantDecrement, CombinedConstantStep],
    Field(discriminator='kind')
]

PricingFunction = Callable[['Listing', int, bool], int]

PricingPolicy = Union[Unchanged, ConstantIncrement, ConstantDecrement,
                      CombinedConstantStep, PricingFunction]

_POLICY_ADAPTER = TypeAdapter(PolicyVariant)


# ═══════════════════════════════════════════════════════════════
# AVALIAÇÃO POR VARIANTE
# ═══════════════════════════════════════════════════════════════

def _floor(price: int) -> int:
    return max(price, 1)


def _unchanged(policy: Unchanged, price: int, is_buy: bool) -> int:
    return price


def _constant_increment(policy: ConstantIncrement, price: int, is_buy: bool) -> int:
    return price + policy.step if is_buy else price


def _constant_decrement(policy: ConstantDecrement, price: int, is_buy: bool) -> int:
    return price if is_buy else _floor(price - policy.step)


def _combined_constant_step(policy: CombinedConstantStep, price: int, is_buy: bool) -> int:
    if is_buy:
        return price + policy.increment
    return _floor(price - policy.decrement)


_EVALUATORS: Dict[type, Callable[[Any, int, bool], int]] = {
    Unchanged: _unchanged,
    ConstantIncrement: _constant_increment,
    ConstantDecrement: _constant_decrement,
    CombinedConstantStep: _combined_constant_step,
}


def compute_price(policy: PricingPolicy, listing: 'Listing', quantity: int, is_buy: bool) -> int:
    """
    Calcula o novo preço unitário de uma cotação.

    Lê apenas `listing.unit_price` (o preço anterior ao ajuste deste negócio),
    a quantidade negociada e o lado do negócio.

    Args:
        policy: Variante de política ou função pura injetada
        listing: Cotação negociada
        quantity: Quantidade negociada
        is_buy: True para compra, False para venda

    Returns:
        Novo preço unitário, sempre >= 1

    Raises:
        InvalidArgument: Se a política for desconhecida ou produzir preço não positivo
    """
    evaluator = _EVALUATORS.get(type(policy))
    if evaluator is not None:
        new_price = evaluator(policy, listing.unit_price, is_buy)
    elif callable(policy):
        new_price = policy(listing, quantity, is_buy)
    else:
        raise InvalidArgument(f"Política de preço desconhecida: {policy!r}")

    if isinstance(new_price, bool) or not isinstance(new_price, int) or new_price <= 0:
        raise InvalidArgument(
            f"A política {describe_policy(policy)} produziu preço inválido: {new_price!r}"
        )
    return new_price


def ensure_policy(policy: Any) -> PricingPolicy:
    """Valida que o objeto pode ser usado como política de preço."""
    if policy is None:
        raise InvalidArgument("A política de preço não pode ser None")
    if type(policy) in _EVALUATORS or callable(policy):
        return policy
    raise InvalidArgument(f"Política de preço desconhecida: {policy!r}")


def describe_policy(policy: PricingPolicy) -> str:
    """Descrição curta da política para logs e relatórios."""
    if type(policy) in _EVALUATORS:
        return str(policy)
    return getattr(policy, '__name__', repr(policy))


# ═══════════════════════════════════════════════════════════════
# CONSTRUÇÃO
# ═══════════════════════════════════════════════════════════════

def parse_policy(spec: Dict[str, Any]) -> PricingPolicy:
    """
    Constrói uma política a partir de um dicionário de configuração.

    Exemplos:
        {'kind': 'unchanged'}
        {'kind': 'constant_increment', 'step': 2}
        {'kind': 'combined_constant_step', 'increment': 2, 'decrement': 1}

    Raises:
        InvalidArgument: Se o dicionário não descrever uma política válida
    """
    if not isinstance(spec, dict):
        raise InvalidArgument(f"Especificação de política deve ser um dicionário: {spec!r}")
    try:
        return _POLICY_ADAPTER.validate_python(spec)
    except ValidationError as e:
        raise InvalidArgument(f"Política de preço inválida {spec}: {_first_error(e)}") from e


def policy_from_step(step: int) -> PricingPolicy:
    """
    Política a partir de um passo com sinal.

    Positivo vira incremento constante, negativo vira decremento constante
    e zero mantém o preço invariável.
    """
    if step > 0:
        return ConstantIncrement(step=step)
    if step < 0:
        return ConstantDecrement(step=-step)
    return Unchanged()


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = '.'.join(str(part) for part in first.get('loc', ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get('msg'))
