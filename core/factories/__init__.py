"""Factories para criação de componentes."""
from .infrastructure import InfrastructureFactory

__all__ = ['InfrastructureFactory']
