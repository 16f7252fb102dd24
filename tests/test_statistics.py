"""Tests for portfolio statistics."""

from __future__ import annotations

from debtsage.constants.debts import DebtType
from debtsage.services.statistics import calculate_debt_statistics
from tests.conftest import assert_float_equal, make_debt


def test_weighted_average_and_rollups():
    debts = [
        make_debt(1, 3000.00, 20.0, 90.00, debt_type=DebtType.CREDIT_CARD),
        make_debt(2, 1000.00, 24.0, 35.00, debt_type=DebtType.CREDIT_CARD),
        make_debt(3, 6000.00, 5.0, 200.00, debt_type=DebtType.STUDENT_LOAN),
        make_debt(4, 9999.00, 30.0, 500.00, is_active=False),
    ]

    stats = calculate_debt_statistics(debts)

    assert stats.total_debts == 3
    assert_float_equal(stats.total_debt, 10000.00)
    assert_float_equal(stats.total_minimum_payment, 325.00)
    # (3000*20 + 1000*24 + 6000*5) / 10000
    assert_float_equal(stats.average_interest_rate, 11.4)
    assert stats.highest_interest_rate == 24.0

    cards = stats.by_type[DebtType.CREDIT_CARD]
    assert cards.count == 2
    assert_float_equal(cards.total_balance, 4000.00)
    assert_float_equal(cards.total_minimum_payment, 125.00)
    assert DebtType.LOAN not in stats.by_type


def test_empty_portfolio_is_all_zero():
    stats = calculate_debt_statistics([])

    assert stats.total_debts == 0
    assert stats.total_debt == 0
    assert stats.average_interest_rate == 0.0
    assert stats.highest_interest_rate == 0.0
    assert stats.by_type == {}
