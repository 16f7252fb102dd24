"""Refinancing comparison: current terms versus a hypothetical new loan."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..logging_config import get_logger
from .amortization import (
    LoanDetails,
    calculate_loan_details,
    calculate_monthly_payment,
    calculate_remaining_term,
    validate_amount,
    validate_rate,
    validate_term,
)
from .debts import DebtSnapshot

logger = get_logger(__name__)


@dataclass(slots=True)
class RefinanceComparison:
    monthly_payment_difference: float
    total_interest_savings: float
    total_savings: float
    is_worth_it: bool


@dataclass(slots=True)
class RefinanceComparisonResult:
    current_loan: LoanDetails
    refinanced_loan: LoanDetails
    comparison: RefinanceComparison
    # None when the new payment is not lower, so fees are never recouped
    break_even_month: Optional[int]
    recommendation: str


def _break_even_month(fees: float, monthly_payment_difference: float) -> Optional[int]:
    if monthly_payment_difference <= 0:
        return None
    return math.ceil(fees / monthly_payment_difference)


def _recommendation(comparison: RefinanceComparison, break_even_month: Optional[int]) -> str:
    if not comparison.is_worth_it:
        return (
            "Refinancing is not recommended. The fees and interest rate difference "
            "don't result in significant savings."
        )
    message = (
        f"Refinancing is recommended! You'll save ${comparison.total_savings:,.2f} "
        "over the life of the loan"
    )
    if comparison.monthly_payment_difference > 0:
        message += (
            f" and reduce your monthly payment by "
            f"${comparison.monthly_payment_difference:,.2f}"
        )
    message += "."
    if break_even_month is not None:
        message += f" Break-even point: {break_even_month} months."
    return message


def compare_refinancing(
    debt: DebtSnapshot,
    new_interest_rate: float,
    refinancing_fees: float = 0.0,
    new_term_months: int | None = None,
) -> RefinanceComparisonResult:
    """Compare paying *debt* as-is against refinancing it at *new_interest_rate*.

    Without ``new_term_months`` the refinanced loan keeps the number of months
    the current payment would take to clear the balance.
    """
    validate_rate(new_interest_rate, field="new interest rate")
    validate_amount(refinancing_fees, field="refinancing fees")
    if new_term_months is not None:
        validate_term(new_term_months, field="new term")

    balance = debt.current_balance
    current_loan = calculate_loan_details(balance, debt.interest_rate, debt.minimum_payment)

    term_months = new_term_months or calculate_remaining_term(
        balance, debt.minimum_payment, debt.interest_rate
    )
    if term_months == 0:
        # Nothing left to refinance; mirror the current (empty) loan.
        new_monthly_payment = 0.0
        refinanced_loan = calculate_loan_details(balance, new_interest_rate, new_monthly_payment)
    else:
        new_monthly_payment = calculate_monthly_payment(balance, new_interest_rate, term_months)
        refinanced_loan = calculate_loan_details(
            balance, new_interest_rate, new_monthly_payment, term_months
        )
    refinanced_loan.total_paid += refinancing_fees

    monthly_payment_difference = current_loan.monthly_payment - refinanced_loan.monthly_payment
    total_interest_savings = current_loan.total_interest_paid - refinanced_loan.total_interest_paid
    total_savings = current_loan.total_paid - refinanced_loan.total_paid

    comparison = RefinanceComparison(
        monthly_payment_difference=monthly_payment_difference,
        total_interest_savings=total_interest_savings,
        total_savings=total_savings,
        is_worth_it=total_savings > 0 and total_interest_savings > refinancing_fees,
    )
    break_even_month = _break_even_month(refinancing_fees, monthly_payment_difference)
    logger.debug(
        "Refinance compared",
        extra={"debt_id": debt.id, "term_months": term_months, "worth_it": comparison.is_worth_it},
    )
    return RefinanceComparisonResult(
        current_loan=current_loan,
        refinanced_loan=refinanced_loan,
        comparison=comparison,
        break_even_month=break_even_month,
        recommendation=_recommendation(comparison, break_even_month),
    )


__all__ = ["RefinanceComparison", "RefinanceComparisonResult", "compare_refinancing"]
