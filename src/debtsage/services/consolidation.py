"""Consolidation planner: several debts versus one consolidated loan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..constants.debts import ConsolidationOutcome
from ..errors import ValidationError
from ..logging_config import get_logger
from .amortization import (
    calculate_loan_details,
    calculate_monthly_payment,
    validate_amount,
    validate_rate,
    validate_term,
)
from .debts import DebtSnapshot

logger = get_logger(__name__)


@dataclass(slots=True)
class DebtSummary:
    id: int
    name: str
    balance: float
    interest_rate: float
    monthly_payment: float


@dataclass(slots=True)
class ConsolidatedLoanDetails:
    total_balance: float
    interest_rate: float
    monthly_payment: float
    term_months: int
    total_interest_paid: float
    total_paid: float
    fees: float


@dataclass(slots=True)
class ConsolidationComparison:
    current_total_monthly_payment: float
    consolidated_monthly_payment: float
    monthly_payment_difference: float
    current_total_interest: float
    consolidated_total_interest: float
    total_interest_savings: float
    is_worth_it: bool


@dataclass(slots=True)
class ConsolidationPlanResult:
    current_debts: list[DebtSummary]
    consolidated_loan: ConsolidatedLoanDetails
    comparison: ConsolidationComparison
    outcome: ConsolidationOutcome
    recommendation: str


def _classify(comparison: ConsolidationComparison) -> ConsolidationOutcome:
    if comparison.is_worth_it:
        return ConsolidationOutcome.RECOMMENDED
    if comparison.monthly_payment_difference > 0:
        return ConsolidationOutcome.LOWER_PAYMENT_FEES_EXCEED_SAVINGS
    return ConsolidationOutcome.NOT_RECOMMENDED


def _recommendation(
    outcome: ConsolidationOutcome, comparison: ConsolidationComparison, fees: float
) -> str:
    savings = comparison.total_interest_savings
    difference = comparison.monthly_payment_difference
    if outcome is ConsolidationOutcome.RECOMMENDED:
        return (
            f"Consolidation is recommended! You'll save ${savings:,.2f} in interest and "
            f"reduce your monthly payment by ${difference:,.2f}. "
            f"Total savings: ${savings - fees:,.2f}."
        )
    if outcome is ConsolidationOutcome.LOWER_PAYMENT_FEES_EXCEED_SAVINGS:
        return (
            f"Consolidation will lower your monthly payment by ${difference:,.2f}, but the "
            f"fees (${fees:,.2f}) exceed the interest savings (${savings:,.2f})."
        )
    return (
        "Consolidation is not recommended. You're better off keeping your current debts "
        "and paying them individually."
    )


def plan_consolidation(
    debts: Sequence[DebtSnapshot],
    consolidated_interest_rate: float,
    consolidated_term_months: int,
    consolidation_fees: float = 0.0,
) -> ConsolidationPlanResult:
    """Compare paying *debts* separately at their minimums to one new loan."""

    if not debts:
        raise ValidationError("No debts found for consolidation")
    validate_rate(consolidated_interest_rate, field="consolidated interest rate")
    validate_term(consolidated_term_months, field="consolidated term")
    validate_amount(consolidation_fees, field="consolidation fees")

    current_debts = [
        DebtSummary(
            id=debt.id,
            name=debt.name,
            balance=debt.current_balance,
            interest_rate=debt.interest_rate,
            monthly_payment=debt.minimum_payment,
        )
        for debt in debts
    ]
    total_balance = sum(debt.current_balance for debt in debts)
    current_total_monthly_payment = sum(debt.minimum_payment for debt in debts)
    current_total_interest = sum(
        calculate_loan_details(
            debt.current_balance, debt.interest_rate, debt.minimum_payment
        ).total_interest_paid
        for debt in debts
    )

    consolidated_payment = calculate_monthly_payment(
        total_balance, consolidated_interest_rate, consolidated_term_months
    )
    consolidated = calculate_loan_details(
        total_balance, consolidated_interest_rate, consolidated_payment, consolidated_term_months
    )
    consolidated_loan = ConsolidatedLoanDetails(
        total_balance=total_balance,
        interest_rate=consolidated_interest_rate,
        monthly_payment=consolidated_payment,
        term_months=consolidated_term_months,
        total_interest_paid=consolidated.total_interest_paid,
        total_paid=consolidated.total_paid + consolidation_fees,
        fees=consolidation_fees,
    )

    monthly_payment_difference = current_total_monthly_payment - consolidated_payment
    total_interest_savings = current_total_interest - consolidated.total_interest_paid
    comparison = ConsolidationComparison(
        current_total_monthly_payment=current_total_monthly_payment,
        consolidated_monthly_payment=consolidated_payment,
        monthly_payment_difference=monthly_payment_difference,
        current_total_interest=current_total_interest,
        consolidated_total_interest=consolidated.total_interest_paid,
        total_interest_savings=total_interest_savings,
        is_worth_it=total_interest_savings > consolidation_fees and monthly_payment_difference > 0,
    )
    outcome = _classify(comparison)
    logger.debug(
        "Consolidation planned",
        extra={"debts": len(current_debts), "outcome": outcome.value},
    )
    return ConsolidationPlanResult(
        current_debts=current_debts,
        consolidated_loan=consolidated_loan,
        comparison=comparison,
        outcome=outcome,
        recommendation=_recommendation(outcome, comparison, consolidation_fees),
    )


__all__ = [
    "ConsolidatedLoanDetails",
    "ConsolidationComparison",
    "ConsolidationPlanResult",
    "DebtSummary",
    "plan_consolidation",
]
