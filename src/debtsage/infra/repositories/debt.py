"""SQLModel implementation of the debt repository."""

from __future__ import annotations

from typing import Sequence

from sqlmodel import Session, select

from ...constants.debts import DebtType
from ...errors import NotFoundError, ValidationError
from ...models.debt import Debt
from ...services.debts import DebtSnapshot
from ..database import SessionFactory


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _get(self, session: Session, debt_id: int, user_id: int) -> Debt:
        debt = session.exec(
            select(Debt).where(Debt.id == debt_id, Debt.user_id == user_id)
        ).first()
        if debt is None:
            raise NotFoundError(f"Debt with ID {debt_id} not found")
        return debt

    def create(self, debt: Debt, *, user_id: int) -> Debt:
        """Create a new debt, validating it through a snapshot first."""
        debt.user_id = user_id
        with self.session_factory() as session:
            session.add(debt)
            session.flush()
            debt.to_snapshot()
            session.commit()
            session.refresh(debt)
            return debt

    def get_snapshot(self, debt_id: int, *, user_id: int) -> DebtSnapshot:
        """Return an immutable snapshot of one debt."""
        with self.session_factory() as session:
            return self._get(session, debt_id, user_id).to_snapshot()

    def list_active_snapshots(self, *, user_id: int) -> list[DebtSnapshot]:
        """List active debts, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(Debt.user_id == user_id, Debt.is_active == True)  # noqa: E712
                .order_by(Debt.created_at, Debt.id)  # type: ignore
            )
            return [debt.to_snapshot() for debt in session.exec(statement).all()]

    def list_snapshots_by_ids(
        self, debt_ids: Sequence[int], *, user_id: int
    ) -> list[DebtSnapshot]:
        """Active snapshots for exactly *debt_ids*, oldest first."""
        wanted = list(dict.fromkeys(debt_ids))
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(
                    Debt.user_id == user_id,
                    Debt.is_active == True,  # noqa: E712
                    Debt.id.in_(wanted),  # type: ignore[union-attr]
                )
                .order_by(Debt.created_at, Debt.id)  # type: ignore
            )
            snapshots = [debt.to_snapshot() for debt in session.exec(statement).all()]

        found = {snapshot.id for snapshot in snapshots}
        missing = [debt_id for debt_id in wanted if debt_id not in found]
        if missing:
            raise NotFoundError(f"Debts not found: {missing}")
        return snapshots

    def update_credit_limit(
        self, debt_id: int, credit_limit: float, *, user_id: int
    ) -> DebtSnapshot:
        """Store an explicit credit limit on a credit card."""
        if credit_limit < 0:
            raise ValidationError("Credit limit cannot be negative")
        with self.session_factory() as session:
            debt = self._get(session, debt_id, user_id)
            if debt.debt_type != DebtType.CREDIT_CARD.value:
                raise ValidationError("This debt is not a credit card")
            debt.credit_limit = credit_limit
            session.add(debt)
            session.commit()
            session.refresh(debt)
            return debt.to_snapshot()

    def deactivate(self, debt_id: int, *, user_id: int) -> None:
        """Soft-delete a debt so calculations skip it."""
        with self.session_factory() as session:
            debt = self._get(session, debt_id, user_id)
            debt.is_active = False
            session.add(debt)
            session.commit()
