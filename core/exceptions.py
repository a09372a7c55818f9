#core/exceptions.py
"""
Exceções do domínio de mercado.
Todas representam pré-condições rejeitadas: nenhuma operação deixa efeito parcial.
"""


class MarketError(Exception):
    """Raiz de todos os erros do motor de negociação."""
    pass


class InvalidArgument(MarketError, ValueError):
    """Argumento malformado (quantidade, preço ou valor não positivo)."""
    pass


class InvalidName(InvalidArgument):
    """Nome vazio ou composto apenas de espaços."""
    pass


class AlreadyListed(MarketError):
    """A empresa já está cotada na bolsa informada."""
    pass


class NotFound(MarketError, LookupError):
    """A empresa não possui cotação na bolsa informada."""
    pass


class InsufficientShares(MarketError):
    """Quantidade pedida maior que as ações disponíveis."""
    pass


class InsufficientFunds(MarketError):
    """Saldo insuficiente para compra ou saque."""
    pass


class InsufficientHoldings(MarketError):
    """Quantidade de venda maior que a posição do operador."""
    pass


__all__ = [
    'MarketError',
    'InvalidArgument',
    'InvalidName',
    'AlreadyListed',
    'NotFound',
    'InsufficientShares',
    'InsufficientFunds',
    'InsufficientHoldings'
]
