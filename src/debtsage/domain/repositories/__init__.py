"""Repository protocols."""

from .debt import DebtRepository

__all__ = ["DebtRepository"]
