"""Single-loan amortization: schedules, payment and term formulas."""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date

from ..constants.debts import (
    MAX_TERM_MONTHS,
    PAID_OFF_EPSILON,
    PAYMENT_RESIDUE_TOLERANCE,
)
from ..errors import InsufficientPaymentError, TermExceededError, ValidationError


@dataclass(slots=True)
class MonthlyPayment:
    """One simulated month. ``month`` is 1-based."""

    month: int
    total_payment: float
    principal_paid: float
    interest_paid: float
    remaining_balance: float


@dataclass(slots=True)
class LoanDetails:
    """Totals for paying *balance* down at a fixed monthly payment."""

    balance: float
    interest_rate: float
    monthly_payment: float
    term_months: int
    total_interest_paid: float
    total_paid: float


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate (18.99) to a monthly decimal rate."""

    return annual_rate_percent / 100 / 12


def validate_rate(annual_rate_percent: float, *, field: str = "interest rate") -> None:
    if not 0 <= annual_rate_percent <= 100:
        raise ValidationError(f"{field} must be between 0 and 100, got {annual_rate_percent}")


def validate_amount(amount: float, *, field: str) -> None:
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative, got {amount}")


def validate_term(months: int, *, field: str = "term") -> None:
    if not 1 <= months <= MAX_TERM_MONTHS:
        raise ValidationError(f"{field} must be between 1 and {MAX_TERM_MONTHS} months, got {months}")


def settle_tolerance(payment: float) -> float:
    """Largest remainder a *payment* may leave behind and still clear the debt."""

    return max(PAID_OFF_EPSILON, payment * PAYMENT_RESIDUE_TOLERANCE)


def ensure_payment_covers_interest(balance: float, annual_rate_percent: float, payment: float) -> None:
    """Reject payments that would not reduce principal in the first month."""

    if balance <= PAID_OFF_EPSILON:
        return
    interest = balance * monthly_rate(annual_rate_percent)
    if payment <= interest:
        raise InsufficientPaymentError(
            f"Payment of {payment:.2f} does not exceed first-month interest of {interest:.2f}"
        )


def build_schedule(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
    max_term_months: int = MAX_TERM_MONTHS,
) -> list[MonthlyPayment]:
    """Simulate a fixed monthly payment against *balance* until it is paid.

    Raises ``InsufficientPaymentError`` before looping when the payment does
    not cover the first month's interest, and ``TermExceededError`` when a
    balance remains after ``max_term_months``.
    """
    validate_amount(balance, field="balance")
    validate_amount(monthly_payment, field="monthly payment")
    validate_rate(annual_rate_percent)
    validate_term(max_term_months, field="max term")
    ensure_payment_covers_interest(balance, annual_rate_percent, monthly_payment)

    rate = monthly_rate(annual_rate_percent)
    tolerance = settle_tolerance(monthly_payment)
    remaining = balance
    rows: list[MonthlyPayment] = []
    month = 0

    while remaining > PAID_OFF_EPSILON and month < max_term_months:
        month += 1
        interest = remaining * rate
        principal = min(monthly_payment - interest, remaining)
        if remaining - principal <= tolerance:
            # Final payment absorbs the rounding residue.
            principal = remaining
        remaining -= principal
        rows.append(
            MonthlyPayment(
                month=month,
                total_payment=principal + interest,
                principal_paid=principal,
                interest_paid=interest,
                remaining_balance=remaining,
            )
        )

    if remaining > PAID_OFF_EPSILON:
        raise TermExceededError(
            f"Balance of {balance:.2f} is not repaid within {max_term_months} months"
        )
    return rows


def calculate_loan_details(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
    max_term_months: int = MAX_TERM_MONTHS,
) -> LoanDetails:
    """Return term and totals for paying off *balance* at *monthly_payment*."""

    rows = build_schedule(balance, annual_rate_percent, monthly_payment, max_term_months)
    total_interest = sum(row.interest_paid for row in rows)
    return LoanDetails(
        balance=balance,
        interest_rate=annual_rate_percent,
        monthly_payment=monthly_payment,
        term_months=len(rows),
        total_interest_paid=total_interest,
        total_paid=balance + total_interest,
    )


def calculate_monthly_payment(principal: float, annual_rate_percent: float, months: int) -> float:
    """Level annuity payment that retires *principal* in *months* periods."""

    validate_amount(principal, field="principal")
    validate_rate(annual_rate_percent)
    validate_term(months)

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return principal / months
    # expm1/log1p keep (1 + r)^n - 1 accurate for tiny rates
    growth_less_one = math.expm1(months * math.log1p(rate))
    return principal * rate * (growth_less_one + 1) / growth_less_one


def calculate_remaining_term(balance: float, payment: float, annual_rate_percent: float) -> int:
    """Months needed to retire *balance* at a fixed *payment*, rounded up."""

    validate_amount(balance, field="balance")
    validate_amount(payment, field="payment")
    validate_rate(annual_rate_percent)
    if balance <= PAID_OFF_EPSILON:
        return 0
    ensure_payment_covers_interest(balance, annual_rate_percent, payment)

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        months = balance / payment
    else:
        months = math.log(payment / (payment - balance * rate)) / math.log1p(rate)

    # log() residue can push an exact integer just above itself
    term = math.ceil(round(months, 9))
    if term > MAX_TERM_MONTHS:
        raise TermExceededError(
            f"Payment of {payment:.2f} needs {term} months, over the {MAX_TERM_MONTHS}-month cap"
        )
    return term


def add_months(start: date, months: int) -> date:
    """Return *start* moved forward by whole months, clamping the day."""

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


__all__ = [
    "LoanDetails",
    "MonthlyPayment",
    "add_months",
    "build_schedule",
    "calculate_loan_details",
    "calculate_monthly_payment",
    "calculate_remaining_term",
    "ensure_payment_covers_interest",
    "monthly_rate",
    "settle_tolerance",
]
