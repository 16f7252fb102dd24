"""CSV export helpers for payoff projections."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from .amortization import MonthlyPayment

HEADERS = ["month", "total_payment", "principal_paid", "interest_paid", "remaining_balance"]


def _cents(value: float) -> str:
    return f"{value:.2f}"


def export_payoff_csv(*, rows: Iterable[MonthlyPayment], output_path: Path) -> Path:
    """Write monthly payoff rows to CSV at `output_path`.

    Columns are deterministic: month, total_payment, principal_paid,
    interest_paid, remaining_balance. Amounts are rounded to cents.
    Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {
                    "month": row.month,
                    "total_payment": _cents(row.total_payment),
                    "principal_paid": _cents(row.principal_paid),
                    "interest_paid": _cents(row.interest_paid),
                    "remaining_balance": _cents(row.remaining_balance),
                }
            )

    return output_path
