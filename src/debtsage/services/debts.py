"""Debt snapshots and payoff ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..constants.debts import DebtType, PayoffStrategy
from ..errors import ValidationError


@dataclass(frozen=True, slots=True)
class DebtSnapshot:
    """Immutable value copy of a debt taken for a single calculation."""

    id: int
    name: str
    current_balance: float
    interest_rate: float  # annual percent, 18.99 == 18.99% APR
    minimum_payment: float
    debt_type: DebtType = DebtType.OTHER
    original_amount: float = 0.0
    credit_limit: Optional[float] = None
    payment_due_day: int = 1
    is_active: bool = True

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "debt_type", DebtType(self.debt_type))
        except ValueError as exc:
            raise ValidationError(f"Unknown debt type {self.debt_type!r}") from exc
        if self.current_balance < 0:
            raise ValidationError(f"Debt {self.id}: current balance cannot be negative")
        if self.original_amount < 0:
            raise ValidationError(f"Debt {self.id}: original amount cannot be negative")
        if self.minimum_payment < 0:
            raise ValidationError(f"Debt {self.id}: minimum payment cannot be negative")
        if not 0 <= self.interest_rate <= 100:
            raise ValidationError(f"Debt {self.id}: interest rate must be between 0 and 100")
        if self.credit_limit is not None and self.credit_limit < 0:
            raise ValidationError(f"Debt {self.id}: credit limit cannot be negative")


def select_debts(
    debts: Iterable[DebtSnapshot], debt_ids: Sequence[int] | None = None
) -> list[DebtSnapshot]:
    """Active debts, narrowed to *debt_ids* when given. Empty selections are rejected."""

    selected = [debt for debt in debts if debt.is_active]
    if debt_ids:
        wanted = set(debt_ids)
        selected = [debt for debt in selected if debt.id in wanted]
    if not selected:
        raise ValidationError("No active debts found")
    return selected


def parse_strategy(value: str | PayoffStrategy) -> PayoffStrategy:
    """Resolve a strategy name case-insensitively."""

    if isinstance(value, PayoffStrategy):
        return value
    try:
        return PayoffStrategy(str(value).strip().upper())
    except ValueError as exc:
        raise ValidationError(f"Unknown payoff strategy {value!r}") from exc


def sort_debts_by_strategy(
    debts: Iterable[DebtSnapshot],
    strategy: str | PayoffStrategy,
    *,
    custom_order: Sequence[int] | None = None,
) -> list[DebtSnapshot]:
    """Return debts in payoff order for *strategy*.

    Sorting is stable, so equal balances or rates keep their input order
    (the repository supplies oldest-created first).
    """
    strategy = parse_strategy(strategy)
    debts = list(debts)

    if strategy is PayoffStrategy.SNOWBALL:
        # Sort debts by balance, ascending.
        return sorted(debts, key=lambda d: d.current_balance)
    if strategy in (PayoffStrategy.AVALANCHE, PayoffStrategy.HIGHEST_RATE):
        # Sort debts by APR, descending.
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    return _custom_order(debts, custom_order or [])


def _custom_order(debts: list[DebtSnapshot], order: Sequence[int]) -> list[DebtSnapshot]:
    by_id = {debt.id: debt for debt in debts}
    unknown = [debt_id for debt_id in order if debt_id not in by_id]
    if unknown:
        raise ValidationError(f"Custom order references unknown debts: {unknown}")
    if len(set(order)) != len(order):
        raise ValidationError("Custom order lists a debt more than once")

    listed_ids = set(order)
    listed = [by_id[debt_id] for debt_id in order]
    rest = [debt for debt in debts if debt.id not in listed_ids]
    return listed + rest


__all__ = ["DebtSnapshot", "parse_strategy", "select_debts", "sort_debts_by_strategy"]
