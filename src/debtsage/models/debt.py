"""Debt entities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants.debts import DebtType

if TYPE_CHECKING:  # pragma: no cover
    from ..services.debts import DebtSnapshot


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Debt(SQLModel, table=True):
    """Loan, card, or other liability owned by a user."""

    __tablename__: ClassVar[str] = "debt"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    debt_type: str = Field(default=DebtType.OTHER.value, max_length=32, index=True)
    original_amount: float = Field(default=0.0, nullable=False)
    current_balance: float = Field(nullable=False)
    interest_rate: float = Field(default=0.0, nullable=False)
    minimum_payment: float = Field(default=0.0, nullable=False)
    payment_due_day: int = Field(default=1, ge=1, le=28)
    # Only meaningful for credit cards; maintained independently of balances.
    credit_limit: Optional[float] = Field(default=None)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)

    def to_snapshot(self) -> "DebtSnapshot":
        """Return an immutable copy for the calculators."""

        from ..services.debts import DebtSnapshot

        if self.id is None:
            raise ValueError("Debt must be persisted before taking a snapshot")
        return DebtSnapshot(
            id=self.id,
            name=self.name,
            debt_type=DebtType(self.debt_type),
            original_amount=self.original_amount,
            current_balance=self.current_balance,
            interest_rate=self.interest_rate,
            minimum_payment=self.minimum_payment,
            payment_due_day=self.payment_due_day,
            credit_limit=self.credit_limit,
            is_active=self.is_active,
        )
