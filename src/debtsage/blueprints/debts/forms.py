"""Request payload forms for the debts API."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping

from debtsage.constants.debts import MAX_TERM_MONTHS

MAX_RATE_PERCENT = 100.0


class PayloadForm:
    """Shared parsing helpers; subclasses are dataclasses with an ``errors`` dict."""

    errors: Dict[str, List[str]]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]):
        names = [f.name for f in fields(cls) if f.init]  # type: ignore[arg-type]
        return cls(**{name: payload.get(name) for name in names})

    def _error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)

    def _number(
        self,
        name: str,
        value: Any,
        *,
        required: bool = True,
        minimum: float = 0.0,
        default: float | None = None,
    ) -> float | None:
        if value is None or value == "":
            if required:
                self._error(name, "This field is required.")
            return default
        if isinstance(value, bool):
            self._error(name, "Enter a valid number.")
            return None
        try:
            number = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError):
            self._error(name, "Enter a valid number.")
            return None
        if not number.is_finite():
            self._error(name, "Enter a valid number.")
            return None
        if number < Decimal(str(minimum)):
            self._error(name, f"Must be at least {minimum:g}.")
        return float(number)

    def _rate(self, name: str, value: Any) -> float | None:
        rate = self._number(name, value)
        if rate is not None and not 0 <= rate <= MAX_RATE_PERCENT:
            self.errors[name] = ["Interest rate must be between 0 and 100 percent."]
        return rate

    def _integer(
        self, name: str, value: Any, *, required: bool = True, minimum: int = 1
    ) -> int | None:
        if value is None or value == "":
            if required:
                self._error(name, "This field is required.")
            return None
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            self._error(name, "Enter a whole number.")
            return None
        try:
            number = int(value)
        except (TypeError, ValueError):
            self._error(name, "Enter a whole number.")
            return None
        if number < minimum:
            self._error(name, f"Must be at least {minimum}.")
        return number

    def _term(self, name: str, value: Any, *, required: bool = True) -> int | None:
        months = self._integer(name, value, required=required)
        if months is not None and months > MAX_TERM_MONTHS:
            self._error(name, f"Term cannot exceed {MAX_TERM_MONTHS} months.")
        return months

    def _id_list(self, name: str, value: Any, *, required: bool = False) -> list[int] | None:
        if value is None:
            if required:
                self._error(name, "This field is required.")
            return None
        if not isinstance(value, list):
            self._error(name, "Provide a list of debt ids.")
            return None
        ids: list[int] = []
        for item in value:
            if isinstance(item, bool) or not isinstance(item, int):
                self._error(name, f"Invalid debt id {item!r}.")
                continue
            ids.append(item)
        if required and not value:
            self._error(name, "Select at least one debt.")
        return ids


@dataclass(slots=True)
class LoanDetailsForm(PayloadForm):
    balance: Any = None
    interest_rate: Any = None
    monthly_payment: Any = None
    term_months: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        self.balance = self._number("balance", self.balance)
        self.interest_rate = self._rate("interest_rate", self.interest_rate)
        self.monthly_payment = self._number("monthly_payment", self.monthly_payment)
        self.term_months = self._term("term_months", self.term_months, required=False)
        return not self.errors


@dataclass(slots=True)
class PayoffForm(PayloadForm):
    strategy: Any = None
    extra_monthly_payment: Any = None
    debt_ids: Any = None
    custom_order: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        if not isinstance(self.strategy, str) or not self.strategy.strip():
            self._error("strategy", "Choose a payoff strategy.")
        self.extra_monthly_payment = self._number(
            "extra_monthly_payment", self.extra_monthly_payment, required=False, default=0.0
        )
        self.debt_ids = self._id_list("debt_ids", self.debt_ids)
        self.custom_order = self._id_list("custom_order", self.custom_order)
        return not self.errors


@dataclass(slots=True)
class RefinanceForm(PayloadForm):
    debt_id: Any = None
    new_interest_rate: Any = None
    refinancing_fees: Any = None
    new_term_months: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        self.debt_id = self._integer("debt_id", self.debt_id)
        self.new_interest_rate = self._rate("new_interest_rate", self.new_interest_rate)
        self.refinancing_fees = self._number(
            "refinancing_fees", self.refinancing_fees, required=False, default=0.0
        )
        self.new_term_months = self._term("new_term_months", self.new_term_months, required=False)
        return not self.errors


@dataclass(slots=True)
class ConsolidationForm(PayloadForm):
    debt_ids: Any = None
    consolidated_interest_rate: Any = None
    consolidated_term_months: Any = None
    consolidation_fees: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        self.debt_ids = self._id_list("debt_ids", self.debt_ids, required=True)
        self.consolidated_interest_rate = self._rate(
            "consolidated_interest_rate", self.consolidated_interest_rate
        )
        self.consolidated_term_months = self._term(
            "consolidated_term_months", self.consolidated_term_months
        )
        self.consolidation_fees = self._number(
            "consolidation_fees", self.consolidation_fees, required=False, default=0.0
        )
        return not self.errors


@dataclass(slots=True)
class CreditLimitForm(PayloadForm):
    credit_limit: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        self.credit_limit = self._number("credit_limit", self.credit_limit)
        return not self.errors


@dataclass(slots=True)
class ExtraPaymentForm(PayloadForm):
    debt_id: Any = None
    extra_payment_amount: Any = None
    number_of_payments: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        self.debt_id = self._integer("debt_id", self.debt_id)
        self.extra_payment_amount = self._number("extra_payment_amount", self.extra_payment_amount)
        self.number_of_payments = self._integer(
            "number_of_payments", self.number_of_payments, required=False
        )
        return not self.errors


@dataclass(slots=True)
class BulkExtraPaymentForm(PayloadForm):
    extra_payment_amount: Any = None
    debt_ids: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        self.errors.clear()
        self.extra_payment_amount = self._number("extra_payment_amount", self.extra_payment_amount)
        self.debt_ids = self._id_list("debt_ids", self.debt_ids)
        return not self.errors
