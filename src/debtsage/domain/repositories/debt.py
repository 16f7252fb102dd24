"""Debt repository protocol."""

from __future__ import annotations

from typing import Protocol, Sequence

from ...models.debt import Debt
from ...services.debts import DebtSnapshot


class DebtRepository(Protocol):
    """Access to debts that hands out immutable snapshots."""

    def create(self, debt: Debt, *, user_id: int) -> Debt:
        """Persist a new debt."""
        ...

    def get_snapshot(self, debt_id: int, *, user_id: int) -> DebtSnapshot:
        """Return a snapshot or raise NotFoundError."""
        ...

    def list_active_snapshots(self, *, user_id: int) -> list[DebtSnapshot]:
        """Active debts, oldest first."""
        ...

    def list_snapshots_by_ids(
        self, debt_ids: Sequence[int], *, user_id: int
    ) -> list[DebtSnapshot]:
        """Active snapshots for exactly these ids; NotFoundError for any missing."""
        ...

    def update_credit_limit(
        self, debt_id: int, credit_limit: float, *, user_id: int
    ) -> DebtSnapshot:
        """Store an explicit credit limit on a credit card."""
        ...

    def deactivate(self, debt_id: int, *, user_id: int) -> None:
        """Soft-delete a debt."""
        ...
