"""Debt planning service: resolves snapshots, then runs the calculators."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Sequence

from ..constants.debts import MAX_TERM_MONTHS, PayoffStrategy
from ..errors import ValidationError
from ..logging_config import get_logger
from .amortization import LoanDetails, calculate_loan_details
from .consolidation import ConsolidationPlanResult, plan_consolidation
from .debts import DebtSnapshot
from .extra_payments import (
    BulkExtraPaymentResult,
    ExtraPaymentImpactResult,
    analyze_bulk_extra_payment,
    analyze_extra_payment_impact,
)
from .payoff import PayoffCalculationResult, calculate_payoff_strategy
from .refinance import RefinanceComparisonResult, compare_refinancing
from .statistics import DebtStatistics, calculate_debt_statistics
from .utilization import CreditUtilizationResult, calculate_credit_utilization

if TYPE_CHECKING:  # pragma: no cover
    from ..domain.repositories.debt import DebtRepository

logger = get_logger(__name__)


class DebtPlanningService:
    """Entry point used by the HTTP and CLI layers.

    The repository is only read (apart from ``update_credit_limit``); every
    calculation runs on snapshots taken at call time.
    """

    def __init__(self, repository: "DebtRepository"):
        self.repository = repository

    def _selection(self, debt_ids: Sequence[int] | None, user_id: int) -> list[DebtSnapshot]:
        if debt_ids:
            debts = self.repository.list_snapshots_by_ids(debt_ids, user_id=user_id)
        else:
            debts = self.repository.list_active_snapshots(user_id=user_id)
        if not debts:
            raise ValidationError("No active debts found")
        return debts

    def loan_details(
        self,
        balance: float,
        interest_rate: float,
        monthly_payment: float,
        term_months: int | None = None,
    ) -> LoanDetails:
        return calculate_loan_details(
            balance, interest_rate, monthly_payment, term_months or MAX_TERM_MONTHS
        )

    def payoff_strategy(
        self,
        *,
        user_id: int,
        strategy: str | PayoffStrategy,
        extra_monthly_payment: float = 0.0,
        debt_ids: Sequence[int] | None = None,
        custom_order: Sequence[int] | None = None,
    ) -> PayoffCalculationResult:
        debts = self._selection(debt_ids, user_id)
        logger.info(
            "Calculating payoff strategy",
            extra={"user_id": user_id, "debts": len(debts), "strategy": str(strategy)},
        )
        return calculate_payoff_strategy(
            debts, strategy, extra_monthly_payment, custom_order=custom_order
        )

    def compare_refinancing(
        self,
        *,
        user_id: int,
        debt_id: int,
        new_interest_rate: float,
        refinancing_fees: float = 0.0,
        new_term_months: int | None = None,
    ) -> RefinanceComparisonResult:
        debt = self.repository.get_snapshot(debt_id, user_id=user_id)
        logger.info("Comparing refinance", extra={"user_id": user_id, "debt_id": debt_id})
        return compare_refinancing(debt, new_interest_rate, refinancing_fees, new_term_months)

    def plan_consolidation(
        self,
        *,
        user_id: int,
        debt_ids: Sequence[int],
        consolidated_interest_rate: float,
        consolidated_term_months: int,
        consolidation_fees: float = 0.0,
    ) -> ConsolidationPlanResult:
        if not debt_ids:
            raise ValidationError("Select at least one debt to consolidate")
        debts = self.repository.list_snapshots_by_ids(debt_ids, user_id=user_id)
        logger.info("Planning consolidation", extra={"user_id": user_id, "debts": len(debts)})
        return plan_consolidation(
            debts, consolidated_interest_rate, consolidated_term_months, consolidation_fees
        )

    def credit_utilization(self, *, user_id: int) -> CreditUtilizationResult:
        return calculate_credit_utilization(self.repository.list_active_snapshots(user_id=user_id))

    def update_credit_limit(
        self, *, user_id: int, debt_id: int, credit_limit: float
    ) -> DebtSnapshot:
        logger.info("Updating credit limit", extra={"user_id": user_id, "debt_id": debt_id})
        return self.repository.update_credit_limit(debt_id, credit_limit, user_id=user_id)

    def extra_payment_impact(
        self,
        *,
        user_id: int,
        debt_id: int,
        extra_payment_amount: float,
        number_of_payments: int | None = None,
        as_of: date | None = None,
    ) -> ExtraPaymentImpactResult:
        debt = self.repository.get_snapshot(debt_id, user_id=user_id)
        return analyze_extra_payment_impact(
            debt, extra_payment_amount, number_of_payments, as_of=as_of
        )

    def bulk_extra_payment(
        self,
        *,
        user_id: int,
        extra_payment_amount: float,
        debt_ids: Sequence[int] | None = None,
        as_of: date | None = None,
    ) -> BulkExtraPaymentResult:
        debts = self._selection(debt_ids, user_id)
        return analyze_bulk_extra_payment(debts, extra_payment_amount, as_of=as_of)

    def statistics(self, *, user_id: int) -> DebtStatistics:
        return calculate_debt_statistics(self.repository.list_active_snapshots(user_id=user_id))


__all__ = ["DebtPlanningService"]
