"""SQLModel table exports."""

from .debt import Debt

__all__ = ["Debt"]
