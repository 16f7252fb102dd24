"""Portfolio-level debt statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..constants.debts import DebtType
from .debts import DebtSnapshot


@dataclass(slots=True)
class DebtTypeTotals:
    """Rollup for one debt type."""

    debt_type: DebtType
    count: int = 0
    total_balance: float = 0.0
    total_minimum_payment: float = 0.0


@dataclass(slots=True)
class DebtStatistics:
    total_debts: int
    total_debt: float
    total_minimum_payment: float
    average_interest_rate: float  # weighted by balance
    highest_interest_rate: float
    by_type: dict[DebtType, DebtTypeTotals] = field(default_factory=dict)


def calculate_debt_statistics(debts: Iterable[DebtSnapshot]) -> DebtStatistics:
    """Summarize active debts; an empty set yields zeros."""

    active = [debt for debt in debts if debt.is_active]
    total_debt = sum(debt.current_balance for debt in active)
    weighted_sum = sum(debt.current_balance * debt.interest_rate for debt in active)

    by_type: dict[DebtType, DebtTypeTotals] = {}
    for debt in active:
        totals = by_type.setdefault(debt.debt_type, DebtTypeTotals(debt_type=debt.debt_type))
        totals.count += 1
        totals.total_balance += debt.current_balance
        totals.total_minimum_payment += debt.minimum_payment

    return DebtStatistics(
        total_debts=len(active),
        total_debt=total_debt,
        total_minimum_payment=sum(debt.minimum_payment for debt in active),
        average_interest_rate=weighted_sum / total_debt if total_debt else 0.0,
        highest_interest_rate=max((debt.interest_rate for debt in active), default=0.0),
        by_type=by_type,
    )


__all__ = ["DebtStatistics", "DebtTypeTotals", "calculate_debt_statistics"]
