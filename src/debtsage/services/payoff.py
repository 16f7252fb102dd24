"""Multi-debt payoff simulation (snowball, avalanche, custom ordering).

A fixed monthly budget (all minimum payments plus an extra amount) is
allocated waterfall-style: every debt except the current target gets exactly
its minimum, and whatever is left goes to the target. When the target is
cleared, its minimum stays in the budget and flows to the next target.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..constants.debts import (
    MAX_TERM_MONTHS,
    PAID_OFF_EPSILON,
    RECOMMENDABLE_STRATEGIES,
    PayoffStrategy,
)
from ..errors import InsufficientPaymentError, TermExceededError
from ..logging_config import get_logger
from .amortization import (
    MonthlyPayment,
    build_schedule,
    calculate_loan_details,
    ensure_payment_covers_interest,
    monthly_rate,
    settle_tolerance,
    validate_amount,
)
from .debts import DebtSnapshot, parse_strategy, select_debts, sort_debts_by_strategy

logger = get_logger(__name__)


@dataclass(slots=True)
class DebtPayoffSchedule:
    """Standalone schedule for one debt, used for per-debt reporting."""

    debt_id: int
    debt_name: str
    original_balance: float
    interest_rate: float
    minimum_payment: float
    total_paid: float
    total_interest_paid: float
    months_to_payoff: int
    payoff_order: int
    monthly_payments: list[MonthlyPayment] = field(default_factory=list)


@dataclass(slots=True)
class PayoffSummary:
    total_debts: int
    total_starting_balance: float
    # Measured against paying every debt its minimum with no rollover;
    # None when that baseline itself runs past the term cap.
    total_interest_saved: Optional[float]
    months_saved: Optional[int]
    recommended_strategy: PayoffStrategy


@dataclass(slots=True)
class PayoffCalculationResult:
    """Outcome of a multi-debt payoff simulation.

    ``monthly_breakdown`` comes from the waterfall simulation and is the
    source of ``total_months`` and ``total_interest_paid``.

    ``payoff_schedule`` is a separate per-debt approximation: each debt is
    amortized on its own at its minimum payment (plus the extra payment for
    the first debt in payoff order) without freed minimums rolling over.
    Its totals are not expected to reconcile with ``monthly_breakdown``.
    """

    strategy: PayoffStrategy
    total_months: int
    total_interest_paid: float
    total_paid: float
    monthly_breakdown: list[MonthlyPayment]
    payoff_schedule: list[DebtPayoffSchedule]
    summary: PayoffSummary


@dataclass(slots=True)
class _Position:
    debt: DebtSnapshot
    balance: float

    def pay(self, payment: float) -> tuple[float, float]:
        """Apply one month's *payment*; returns (interest, principal)."""
        interest = self.balance * monthly_rate(self.debt.interest_rate)
        principal = min(payment - interest, self.balance)
        if self.balance - principal <= settle_tolerance(payment):
            principal = self.balance
        self.balance -= principal
        return interest, principal


def _check_allotments(ordered: Sequence[DebtSnapshot], extra_monthly_payment: float) -> None:
    """Every debt's first-month allotment must cover its interest."""

    for index, debt in enumerate(ordered):
        allotment = debt.minimum_payment + (extra_monthly_payment if index == 0 else 0.0)
        try:
            ensure_payment_covers_interest(debt.current_balance, debt.interest_rate, allotment)
        except InsufficientPaymentError as exc:
            raise InsufficientPaymentError(f"{debt.name}: {exc}") from exc


def _simulate_waterfall(
    ordered: Sequence[DebtSnapshot], extra_monthly_payment: float
) -> tuple[list[MonthlyPayment], float]:
    """Run the waterfall over value copies of *ordered* debts.

    Returns the aggregate monthly rows and the total interest paid.
    """
    _check_allotments(ordered, extra_monthly_payment)

    total_budget = sum(debt.minimum_payment for debt in ordered) + extra_monthly_payment
    remaining = [
        _Position(debt=debt, balance=debt.current_balance)
        for debt in ordered
        if debt.current_balance > PAID_OFF_EPSILON
    ]
    rows: list[MonthlyPayment] = []
    total_interest = 0.0
    month = 0

    while remaining:
        month += 1
        if month > MAX_TERM_MONTHS:
            raise TermExceededError(
                f"Payoff calculation exceeded the maximum term of {MAX_TERM_MONTHS} months"
            )

        available = total_budget
        month_principal = 0.0
        month_interest = 0.0

        # Minimums on everything but the target
        for position in remaining[1:]:
            interest, principal = position.pay(position.debt.minimum_payment)
            available -= position.debt.minimum_payment
            month_interest += interest
            month_principal += principal

        interest, principal = remaining[0].pay(available)
        month_interest += interest
        month_principal += principal
        total_interest += month_interest

        rows.append(
            MonthlyPayment(
                month=month,
                total_payment=month_principal + month_interest,
                principal_paid=month_principal,
                interest_paid=month_interest,
                remaining_balance=sum(position.balance for position in remaining),
            )
        )
        remaining = [position for position in remaining if position.balance > 0]

    return rows, total_interest


def _individual_schedules(
    ordered: Sequence[DebtSnapshot], extra_monthly_payment: float
) -> list[DebtPayoffSchedule]:
    schedules = []
    for index, debt in enumerate(ordered):
        payment = debt.minimum_payment + (extra_monthly_payment if index == 0 else 0.0)
        rows = build_schedule(debt.current_balance, debt.interest_rate, payment)
        total_interest = sum(row.interest_paid for row in rows)
        schedules.append(
            DebtPayoffSchedule(
                debt_id=debt.id,
                debt_name=debt.name,
                original_balance=debt.current_balance,
                interest_rate=debt.interest_rate,
                minimum_payment=debt.minimum_payment,
                total_paid=debt.current_balance + total_interest,
                total_interest_paid=total_interest,
                months_to_payoff=len(rows),
                payoff_order=index + 1,
                monthly_payments=rows,
            )
        )
    return schedules


def _minimum_only_baseline(debts: Sequence[DebtSnapshot]) -> Optional[tuple[float, int]]:
    """Interest and months when each debt is paid alone at its minimum."""

    try:
        details = [
            calculate_loan_details(debt.current_balance, debt.interest_rate, debt.minimum_payment)
            for debt in debts
        ]
    except (InsufficientPaymentError, TermExceededError) as exc:
        logger.info("Minimum-only baseline unavailable: %s", exc)
        return None
    total_interest = sum(item.total_interest_paid for item in details)
    months = max((item.term_months for item in details), default=0)
    return total_interest, months


def recommend_strategy(
    debts: Sequence[DebtSnapshot],
    extra_monthly_payment: float,
    *,
    fallback: PayoffStrategy = PayoffStrategy.AVALANCHE,
) -> PayoffStrategy:
    """Pick the strategy with the lowest total interest.

    Only the fixed set in ``RECOMMENDABLE_STRATEGIES`` is simulated; ties go
    to the earlier entry.
    """
    best = fallback
    lowest_interest = math.inf
    for candidate in RECOMMENDABLE_STRATEGIES:
        ordered = sort_debts_by_strategy(debts, candidate)
        try:
            _, interest = _simulate_waterfall(ordered, extra_monthly_payment)
        except (InsufficientPaymentError, TermExceededError) as exc:
            logger.info("Skipping %s in recommendation: %s", candidate.value, exc)
            continue
        if interest < lowest_interest:
            lowest_interest = interest
            best = candidate
    return best


def calculate_payoff_strategy(
    debts: Iterable[DebtSnapshot],
    strategy: str | PayoffStrategy,
    extra_monthly_payment: float = 0.0,
    debt_ids: Sequence[int] | None = None,
    *,
    custom_order: Sequence[int] | None = None,
) -> PayoffCalculationResult:
    """Simulate paying off *debts* in the order given by *strategy*."""

    strategy = parse_strategy(strategy)
    validate_amount(extra_monthly_payment, field="extra monthly payment")
    selected = select_debts(debts, debt_ids)
    ordered = sort_debts_by_strategy(selected, strategy, custom_order=custom_order)

    monthly_breakdown, total_interest = _simulate_waterfall(ordered, extra_monthly_payment)
    payoff_schedule = _individual_schedules(ordered, extra_monthly_payment)

    total_starting_balance = sum(debt.current_balance for debt in ordered)
    total_months = len(monthly_breakdown)

    baseline = _minimum_only_baseline(ordered)
    interest_saved: Optional[float] = None
    months_saved: Optional[int] = None
    if baseline is not None:
        interest_saved = baseline[0] - total_interest
        months_saved = baseline[1] - total_months

    summary = PayoffSummary(
        total_debts=len(ordered),
        total_starting_balance=total_starting_balance,
        total_interest_saved=interest_saved,
        months_saved=months_saved,
        recommended_strategy=recommend_strategy(
            selected, extra_monthly_payment, fallback=strategy
        ),
    )
    logger.debug(
        "Payoff simulated",
        extra={
            "strategy": strategy.value,
            "debts": len(ordered),
            "months": total_months,
            "total_interest": round(total_interest, 2),
        },
    )
    return PayoffCalculationResult(
        strategy=strategy,
        total_months=total_months,
        total_interest_paid=total_interest,
        total_paid=total_starting_balance + total_interest,
        monthly_breakdown=monthly_breakdown,
        payoff_schedule=payoff_schedule,
        summary=summary,
    )


__all__ = [
    "DebtPayoffSchedule",
    "PayoffCalculationResult",
    "PayoffSummary",
    "calculate_payoff_strategy",
    "recommend_strategy",
]
