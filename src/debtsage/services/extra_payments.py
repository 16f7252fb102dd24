"""Extra payment impact, for a single debt or routed across a debt set."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..errors import ValidationError
from ..logging_config import get_logger
from .amortization import LoanDetails, add_months, calculate_loan_details, validate_amount
from .debts import DebtSnapshot, select_debts

logger = get_logger(__name__)


@dataclass(slots=True)
class PayoffProjection:
    monthly_payment: float
    months_to_payoff: int
    total_interest_paid: float
    total_paid: float
    payoff_date: date


@dataclass(slots=True)
class ExtraPaymentImpact:
    months_saved: int
    interest_saved: float
    # Interest delta only; a one-time lump sum is spent, not saved.
    total_saved: float
    percentage_faster: float
    new_payoff_date: date


@dataclass(slots=True)
class ExtraPaymentImpactResult:
    debt_id: int
    debt_name: str
    current_balance: float
    interest_rate: float
    recurring: bool
    without_extra_payment: PayoffProjection
    with_extra_payment: PayoffProjection
    impact: ExtraPaymentImpact
    recommendation: str


@dataclass(slots=True)
class BulkExtraPaymentResult:
    total_extra_payment: float
    target_debt_id: int
    debts_impacted: int
    debt_impacts: list[ExtraPaymentImpactResult]
    total_months_saved: int
    total_interest_saved: float
    recommendation: str


def _projection(details: LoanDetails, as_of: date, *, lump_sum: float = 0.0) -> PayoffProjection:
    return PayoffProjection(
        monthly_payment=details.monthly_payment,
        months_to_payoff=details.term_months,
        total_interest_paid=details.total_interest_paid,
        total_paid=details.total_paid + lump_sum,
        payoff_date=add_months(as_of, details.term_months),
    )


def _recommendation(
    *, recurring: bool, amount: float, months_saved: int, interest_saved: float, payoff: date
) -> str:
    if recurring:
        if months_saved > 0:
            return (
                f"Adding ${amount:,.2f} to your monthly payment will save you {months_saved} "
                f"months and ${interest_saved:,.2f} in interest! "
                f"Your new payoff date: {payoff.isoformat()}"
            )
        return "Consider increasing your extra payment amount for more significant impact."
    if months_saved > 0:
        return (
            f"Making a one-time payment of ${amount:,.2f} will save you {months_saved} months "
            f"and ${interest_saved:,.2f} in interest!"
        )
    return (
        "This extra payment will have minimal impact. "
        "Consider increasing the amount or making recurring payments."
    )


def analyze_extra_payment_impact(
    debt: DebtSnapshot,
    extra_payment_amount: float,
    number_of_payments: int | None = None,
    *,
    as_of: date | None = None,
) -> ExtraPaymentImpactResult:
    """Quantify what an extra payment does to *debt*'s payoff.

    Without ``number_of_payments`` the amount is a one-time lump sum applied
    to principal now; with it, the amount is added to every monthly payment.
    """
    validate_amount(extra_payment_amount, field="extra payment amount")
    if number_of_payments is not None and number_of_payments < 1:
        raise ValidationError("number of payments must be at least 1")
    as_of = as_of or date.today()
    recurring = number_of_payments is not None

    baseline = calculate_loan_details(debt.current_balance, debt.interest_rate, debt.minimum_payment)

    if recurring:
        with_extra = calculate_loan_details(
            debt.current_balance, debt.interest_rate, debt.minimum_payment + extra_payment_amount
        )
        lump_sum = 0.0
    else:
        lump_sum = min(extra_payment_amount, debt.current_balance)
        with_extra = calculate_loan_details(
            debt.current_balance - lump_sum, debt.interest_rate, debt.minimum_payment
        )

    without_projection = _projection(baseline, as_of)
    with_projection = _projection(with_extra, as_of, lump_sum=lump_sum)

    months_saved = baseline.term_months - with_extra.term_months
    interest_saved = baseline.total_interest_paid - with_extra.total_interest_paid
    percentage_faster = (
        months_saved / baseline.term_months * 100 if baseline.term_months else 0.0
    )
    impact = ExtraPaymentImpact(
        months_saved=months_saved,
        interest_saved=interest_saved,
        total_saved=interest_saved,
        percentage_faster=percentage_faster,
        new_payoff_date=with_projection.payoff_date,
    )
    return ExtraPaymentImpactResult(
        debt_id=debt.id,
        debt_name=debt.name,
        current_balance=debt.current_balance,
        interest_rate=debt.interest_rate,
        recurring=recurring,
        without_extra_payment=without_projection,
        with_extra_payment=with_projection,
        impact=impact,
        recommendation=_recommendation(
            recurring=recurring,
            amount=extra_payment_amount,
            months_saved=months_saved,
            interest_saved=interest_saved,
            payoff=with_projection.payoff_date,
        ),
    )


def analyze_bulk_extra_payment(
    debts: Iterable[DebtSnapshot],
    extra_payment_amount: float,
    debt_ids: Sequence[int] | None = None,
    *,
    as_of: date | None = None,
) -> BulkExtraPaymentResult:
    """Route the whole extra payment, as a lump sum, to the highest-rate debt."""

    validate_amount(extra_payment_amount, field="extra payment amount")
    selected = select_debts(debts, debt_ids)
    target = sorted(selected, key=lambda d: d.interest_rate, reverse=True)[0]

    impact = analyze_extra_payment_impact(target, extra_payment_amount, as_of=as_of)
    months_saved = impact.impact.months_saved
    interest_saved = impact.impact.interest_saved

    if interest_saved > 0:
        recommendation = (
            f"Apply the ${extra_payment_amount:,.2f} extra payment to {target.name} "
            f"(highest interest rate: {target.interest_rate:g}%). This will save you "
            f"{months_saved} months and ${interest_saved:,.2f} in interest!"
        )
    else:
        recommendation = "Consider distributing the payment differently or increasing the amount."

    logger.debug(
        "Bulk extra payment routed",
        extra={"target_debt_id": target.id, "amount": extra_payment_amount},
    )
    return BulkExtraPaymentResult(
        total_extra_payment=extra_payment_amount,
        target_debt_id=target.id,
        debts_impacted=1,
        debt_impacts=[impact],
        total_months_saved=months_saved,
        total_interest_saved=interest_saved,
        recommendation=recommendation,
    )


__all__ = [
    "BulkExtraPaymentResult",
    "ExtraPaymentImpact",
    "ExtraPaymentImpactResult",
    "PayoffProjection",
    "analyze_bulk_extra_payment",
    "analyze_extra_payment_impact",
]
