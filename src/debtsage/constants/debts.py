"""
Debt enumerations and simulation limits used across the calculators,
the SQLModel tables, and the HTTP layer.
"""

from __future__ import annotations

from enum import Enum

# Every simulation loop stops here: 50 years of monthly periods.
MAX_TERM_MONTHS = 600

# Balances at or below half a cent are treated as paid.
PAID_OFF_EPSILON = 0.005

# Float residue left after the last scheduled payment grows with the payment
# size and with compounding; a remainder within this share of the payment is
# settled in the same month.
PAYMENT_RESIDUE_TOLERANCE = 1e-5


class DebtType(str, Enum):
    CREDIT_CARD = "CREDIT_CARD"
    LOAN = "LOAN"
    MORTGAGE = "MORTGAGE"
    STUDENT_LOAN = "STUDENT_LOAN"
    OTHER = "OTHER"


class PayoffStrategy(str, Enum):
    SNOWBALL = "SNOWBALL"
    AVALANCHE = "AVALANCHE"
    HIGHEST_RATE = "HIGHEST_RATE"
    CUSTOM = "CUSTOM"


# Fixed set evaluated when recommending a strategy.
RECOMMENDABLE_STRATEGIES = (
    PayoffStrategy.SNOWBALL,
    PayoffStrategy.AVALANCHE,
    PayoffStrategy.HIGHEST_RATE,
)


class UtilizationBand(str, Enum):
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    EXCELLENT = "EXCELLENT"


# Upper bounds (inclusive) of the utilization bands, in percent.
EXCELLENT_UTILIZATION_MAX = 10.0
MODERATE_UTILIZATION_MAX = 30.0


class ConsolidationOutcome(str, Enum):
    RECOMMENDED = "RECOMMENDED"
    LOWER_PAYMENT_FEES_EXCEED_SAVINGS = "LOWER_PAYMENT_FEES_EXCEED_SAVINGS"
    NOT_RECOMMENDED = "NOT_RECOMMENDED"
