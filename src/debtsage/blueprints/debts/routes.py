"""Debt calculation routes."""

from __future__ import annotations

from flask import current_app, jsonify, request

from debtsage.errors import DebtEngineError, ValidationError
from debtsage.extensions import get_planning_service
from debtsage.logging_config import get_logger

from . import bp
from .forms import (
    BulkExtraPaymentForm,
    ConsolidationForm,
    CreditLimitForm,
    ExtraPaymentForm,
    LoanDetailsForm,
    PayloadForm,
    PayoffForm,
    RefinanceForm,
)
from .serializers import to_json

logger = get_logger(__name__)


def _user_id() -> int:
    raw = request.headers.get("X-User-Id")
    if raw is None or raw == "":
        return current_app.config["DEFAULT_USER_ID"]
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError("X-User-Id header must be an integer") from exc


def _bind(form_cls: type[PayloadForm]):
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return form_cls.from_payload(payload)


def _invalid(form: PayloadForm):
    return jsonify({"error": "invalid_request", "fields": form.errors}), 400


@bp.errorhandler(DebtEngineError)
def handle_engine_error(exc: DebtEngineError):
    logger.info("Request rejected: %s", exc, extra={"error_code": exc.code})
    return jsonify({"error": exc.code, "message": str(exc)}), exc.status_code


@bp.post("/loan-details")
def loan_details():
    """Amortize a single balance at a fixed payment."""

    form = _bind(LoanDetailsForm)
    if not form.validate():
        return _invalid(form)
    result = get_planning_service().loan_details(
        form.balance, form.interest_rate, form.monthly_payment, form.term_months
    )
    return jsonify(to_json(result))


@bp.post("/payoff")
def payoff():
    """Simulate a multi-debt payoff strategy."""

    form = _bind(PayoffForm)
    if not form.validate():
        return _invalid(form)
    result = get_planning_service().payoff_strategy(
        user_id=_user_id(),
        strategy=form.strategy,
        extra_monthly_payment=form.extra_monthly_payment,
        debt_ids=form.debt_ids,
        custom_order=form.custom_order,
    )
    return jsonify(to_json(result))


@bp.post("/refinance")
def refinance():
    form = _bind(RefinanceForm)
    if not form.validate():
        return _invalid(form)
    result = get_planning_service().compare_refinancing(
        user_id=_user_id(),
        debt_id=form.debt_id,
        new_interest_rate=form.new_interest_rate,
        refinancing_fees=form.refinancing_fees,
        new_term_months=form.new_term_months,
    )
    return jsonify(to_json(result))


@bp.post("/consolidation")
def consolidation():
    form = _bind(ConsolidationForm)
    if not form.validate():
        return _invalid(form)
    result = get_planning_service().plan_consolidation(
        user_id=_user_id(),
        debt_ids=form.debt_ids,
        consolidated_interest_rate=form.consolidated_interest_rate,
        consolidated_term_months=form.consolidated_term_months,
        consolidation_fees=form.consolidation_fees,
    )
    return jsonify(to_json(result))


@bp.get("/credit-utilization")
def credit_utilization():
    result = get_planning_service().credit_utilization(user_id=_user_id())
    return jsonify(to_json(result))


@bp.put("/<int:debt_id>/credit-limit")
def update_credit_limit(debt_id: int):
    """Store an explicit credit limit on a credit card."""

    form = _bind(CreditLimitForm)
    if not form.validate():
        return _invalid(form)
    snapshot = get_planning_service().update_credit_limit(
        user_id=_user_id(), debt_id=debt_id, credit_limit=form.credit_limit
    )
    return jsonify(to_json(snapshot))


@bp.post("/extra-payment")
def extra_payment():
    form = _bind(ExtraPaymentForm)
    if not form.validate():
        return _invalid(form)
    result = get_planning_service().extra_payment_impact(
        user_id=_user_id(),
        debt_id=form.debt_id,
        extra_payment_amount=form.extra_payment_amount,
        number_of_payments=form.number_of_payments,
    )
    return jsonify(to_json(result))


@bp.post("/bulk-extra-payment")
def bulk_extra_payment():
    form = _bind(BulkExtraPaymentForm)
    if not form.validate():
        return _invalid(form)
    result = get_planning_service().bulk_extra_payment(
        user_id=_user_id(),
        extra_payment_amount=form.extra_payment_amount,
        debt_ids=form.debt_ids,
    )
    return jsonify(to_json(result))


@bp.get("/statistics")
def statistics():
    result = get_planning_service().statistics(user_id=_user_id())
    return jsonify(to_json(result))
