"""Error taxonomy shared by the calculators, repository, and API layer."""

from __future__ import annotations


class DebtEngineError(Exception):
    """Base exception for debt calculations."""

    code = "debt_engine_error"
    status_code = 400


class ValidationError(DebtEngineError):
    """Empty or invalid debt selection, out-of-range rate, negative amount, unknown strategy."""

    code = "validation_error"
    status_code = 400


class InsufficientPaymentError(DebtEngineError):
    """A payment does not exceed the interest accrued in its first period."""

    code = "insufficient_payment"
    status_code = 422


class TermExceededError(DebtEngineError):
    """A simulation would need more months than the hard term cap."""

    code = "term_exceeded"
    status_code = 422


class NotFoundError(DebtEngineError):
    """Referenced debt ids are absent or belong to another user."""

    code = "not_found"
    status_code = 404


__all__ = [
    "DebtEngineError",
    "ValidationError",
    "InsufficientPaymentError",
    "TermExceededError",
    "NotFoundError",
]
