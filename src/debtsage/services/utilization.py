"""Credit utilization analytics over credit-card debts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..constants.debts import (
    EXCELLENT_UTILIZATION_MAX,
    MODERATE_UTILIZATION_MAX,
    DebtType,
    UtilizationBand,
)
from ..errors import ValidationError
from .debts import DebtSnapshot


@dataclass(slots=True)
class CardUtilization:
    debt_id: int
    card_name: str
    credit_limit: float
    current_balance: float
    utilization: float
    band: UtilizationBand
    recommendation: str


@dataclass(slots=True)
class CreditUtilizationResult:
    total_credit_limit: float
    total_used_credit: float
    utilization_percentage: float
    band: UtilizationBand
    utilization_by_card: list[CardUtilization]
    recommendation: str
    impact_on_credit_score: str


def classify_utilization(percentage: float) -> UtilizationBand:
    if percentage > MODERATE_UTILIZATION_MAX:
        return UtilizationBand.HIGH
    if percentage > EXCELLENT_UTILIZATION_MAX:
        return UtilizationBand.MODERATE
    return UtilizationBand.EXCELLENT


_CARD_MESSAGES = {
    UtilizationBand.HIGH: "High utilization ({pct:.1f}%). Pay down to below 30% to improve credit score.",
    UtilizationBand.MODERATE: "Moderate utilization ({pct:.1f}%). Consider paying down for optimal credit score.",
    UtilizationBand.EXCELLENT: "Excellent utilization ({pct:.1f}%)!",
}

_OVERALL_MESSAGES = {
    UtilizationBand.HIGH: (
        "Your overall credit utilization is {pct:.1f}%, which is considered high. "
        "Aim to keep it below 30% to improve your credit score."
    ),
    UtilizationBand.MODERATE: (
        "Your overall credit utilization is {pct:.1f}%, which is moderate. "
        "For optimal credit score, try to keep it below 10%."
    ),
    UtilizationBand.EXCELLENT: (
        "Excellent! Your credit utilization is {pct:.1f}%, which is optimal for your credit score."
    ),
}

_SCORE_IMPACT = {
    UtilizationBand.HIGH: "Negative impact - likely reducing your credit score",
    UtilizationBand.MODERATE: "Moderate impact - some effect on credit score",
    UtilizationBand.EXCELLENT: "Positive impact - helping your credit score",
}


def calculate_credit_utilization(debts: Iterable[DebtSnapshot]) -> CreditUtilizationResult:
    """Utilization per active credit card and across all of them.

    Every card must carry an explicit positive ``credit_limit``.
    """
    cards = [
        debt for debt in debts if debt.debt_type is DebtType.CREDIT_CARD and debt.is_active
    ]
    if not cards:
        raise ValidationError("No credit cards found")

    missing = [card.name for card in cards if not card.credit_limit]
    if missing:
        raise ValidationError(f"Credit limit is not set for: {', '.join(missing)}")

    per_card: list[CardUtilization] = []
    for card in cards:
        utilization = card.current_balance / card.credit_limit * 100
        band = classify_utilization(utilization)
        per_card.append(
            CardUtilization(
                debt_id=card.id,
                card_name=card.name,
                credit_limit=card.credit_limit,
                current_balance=card.current_balance,
                utilization=utilization,
                band=band,
                recommendation=_CARD_MESSAGES[band].format(pct=utilization),
            )
        )

    total_limit = sum(card.credit_limit for card in per_card)
    total_used = sum(card.current_balance for card in per_card)
    overall = total_used / total_limit * 100
    band = classify_utilization(overall)
    return CreditUtilizationResult(
        total_credit_limit=total_limit,
        total_used_credit=total_used,
        utilization_percentage=overall,
        band=band,
        utilization_by_card=per_card,
        recommendation=_OVERALL_MESSAGES[band].format(pct=overall),
        impact_on_credit_score=_SCORE_IMPACT[band],
    )


__all__ = [
    "CardUtilization",
    "CreditUtilizationResult",
    "calculate_credit_utilization",
    "classify_utilization",
]
