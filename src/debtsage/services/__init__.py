"""Service module exports."""

from . import (
    amortization,
    consolidation,
    debts,
    export_csv,
    extra_payments,
    payoff,
    refinance,
    statistics,
    utilization,
)

__all__ = [
    "amortization",
    "consolidation",
    "debts",
    "export_csv",
    "extra_payments",
    "payoff",
    "refinance",
    "statistics",
    "utilization",
]
