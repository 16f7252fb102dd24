"""Tests for the multi-debt waterfall payoff simulation.

These tests verify:
- Budget allocation (minimums on non-targets, leftover to the target)
- Strategy comparisons and the recommended strategy
- Monotonicity in the extra payment
- Term cap and insufficient-payment guards
- The per-debt schedules reported alongside the aggregate breakdown
"""

from __future__ import annotations

import pytest
from debtsage.constants.debts import PayoffStrategy
from debtsage.errors import InsufficientPaymentError, TermExceededError, ValidationError
from debtsage.services.amortization import calculate_loan_details, calculate_monthly_payment
from debtsage.services.payoff import calculate_payoff_strategy, recommend_strategy
from tests.conftest import assert_float_equal, make_debt


@pytest.fixture
def two_debts():
    """Small low-rate debt and larger high-rate debt."""
    return [
        make_debt(1, 100.00, 5.0, 25.00, name="Store card"),
        make_debt(2, 500.00, 20.0, 25.00, name="Credit card"),
    ]


@pytest.fixture
def household_debts():
    return [
        make_debt(1, 2500.00, 22.9, 75.00, name="Visa"),
        make_debt(2, 9000.00, 6.5, 250.00, name="Car loan"),
        make_debt(3, 800.00, 17.0, 35.00, name="Store card"),
    ]


class TestSingleDebt:
    def test_first_month_breakdown(self):
        """$1000 at 12% with $100 minimum: $10 interest, $90 principal."""
        result = calculate_payoff_strategy(
            [make_debt(1, 1000.00, 12.0, 100.00)], PayoffStrategy.AVALANCHE
        )

        first = result.monthly_breakdown[0]
        assert first.month == 1
        assert_float_equal(first.interest_paid, 10.00)
        assert_float_equal(first.principal_paid, 90.00)
        assert_float_equal(first.remaining_balance, 910.00)
        assert result.total_months == 11

    def test_matches_standalone_amortization(self):
        """One debt with extra behaves like a loan paid at minimum plus extra."""
        result = calculate_payoff_strategy(
            [make_debt(1, 5000.00, 15.0, 200.00)], PayoffStrategy.SNOWBALL, 50.00
        )
        details = calculate_loan_details(5000.00, 15.0, 250.00)

        assert result.total_months == details.term_months
        assert_float_equal(result.total_interest_paid, details.total_interest_paid)

    @pytest.mark.parametrize(
        "balance,rate,months", [(8200.50, 35.99, 480), (875000.25, 19.99, 600)]
    )
    def test_annuity_minimum_finishes_on_term(self, balance, rate, months):
        minimum = calculate_monthly_payment(balance, rate, months)

        result = calculate_payoff_strategy([make_debt(1, balance, rate, minimum)], "AVALANCHE")

        assert result.total_months == months
        assert result.monthly_breakdown[-1].remaining_balance == 0.0
        assert result.payoff_schedule[0].months_to_payoff == months

    def test_mortgage_minimum_settles_behind_a_target(self):
        """A mortgage paid at its annuity minimum still clears while a card is targeted."""
        mortgage_minimum = calculate_monthly_payment(150000.00, 6.5, 360)
        debts = [
            make_debt(1, 2000.00, 24.0, 60.00, name="Card"),
            make_debt(2, 150000.00, 6.5, mortgage_minimum, name="Mortgage"),
        ]

        result = calculate_payoff_strategy(debts, "AVALANCHE", 25.00)

        assert result.total_months <= 360
        assert result.monthly_breakdown[-1].remaining_balance == 0.0

    def test_zero_balance_debt_needs_no_months(self):
        result = calculate_payoff_strategy([make_debt(1, 0.0, 18.0, 0.0)], "SNOWBALL")

        assert result.total_months == 0
        assert result.monthly_breakdown == []
        assert result.total_interest_paid == 0.0


class TestAggregateBreakdown:
    def test_first_month_uses_whole_budget(self, two_debts):
        result = calculate_payoff_strategy(two_debts, PayoffStrategy.AVALANCHE, 50.00)
        assert_float_equal(result.monthly_breakdown[0].total_payment, 100.00)

    def test_rows_are_consistent(self, household_debts):
        result = calculate_payoff_strategy(household_debts, PayoffStrategy.SNOWBALL, 100.00)

        previous = sum(debt.current_balance for debt in household_debts)
        for row in result.monthly_breakdown:
            assert row.remaining_balance >= 0
            assert_float_equal(row.total_payment, row.principal_paid + row.interest_paid)
            assert_float_equal(row.remaining_balance, previous - row.principal_paid)
            previous = row.remaining_balance
        assert result.monthly_breakdown[-1].remaining_balance == 0.0

    def test_totals(self, household_debts):
        result = calculate_payoff_strategy(household_debts, PayoffStrategy.AVALANCHE, 100.00)

        interest = sum(row.interest_paid for row in result.monthly_breakdown)
        assert_float_equal(result.total_interest_paid, interest)
        assert_float_equal(result.total_paid, 12300.00 + result.total_interest_paid)
        assert result.total_months == len(result.monthly_breakdown)

    def test_inputs_untouched(self, household_debts):
        balances = [debt.current_balance for debt in household_debts]
        calculate_payoff_strategy(household_debts, PayoffStrategy.SNOWBALL, 250.00)
        assert [debt.current_balance for debt in household_debts] == balances

    def test_deterministic(self, household_debts):
        first = calculate_payoff_strategy(household_debts, "AVALANCHE", 80.00)
        second = calculate_payoff_strategy(household_debts, "AVALANCHE", 80.00)
        assert first == second


class TestStrategyComparison:
    def test_avalanche_never_costs_more_than_snowball(self, two_debts):
        """$100 @ 5% and $500 @ 20%: paying the 20% debt first saves interest."""
        avalanche = calculate_payoff_strategy(two_debts, PayoffStrategy.AVALANCHE, 50.00)
        snowball = calculate_payoff_strategy(two_debts, PayoffStrategy.SNOWBALL, 50.00)

        assert avalanche.total_interest_paid <= snowball.total_interest_paid

    def test_highest_rate_equals_avalanche(self, household_debts):
        avalanche = calculate_payoff_strategy(household_debts, PayoffStrategy.AVALANCHE, 120.00)
        highest = calculate_payoff_strategy(household_debts, PayoffStrategy.HIGHEST_RATE, 120.00)

        assert avalanche.total_months == highest.total_months
        assert avalanche.total_interest_paid == highest.total_interest_paid
        assert [s.debt_id for s in avalanche.payoff_schedule] == [
            s.debt_id for s in highest.payoff_schedule
        ]

    def test_custom_order_is_followed(self, household_debts):
        result = calculate_payoff_strategy(
            household_debts, PayoffStrategy.CUSTOM, 100.00, custom_order=[2, 1]
        )
        assert [s.debt_id for s in result.payoff_schedule] == [2, 1, 3]

    @pytest.mark.parametrize("strategy", ["SNOWBALL", "AVALANCHE", "HIGHEST_RATE"])
    def test_more_extra_never_slower(self, household_debts, strategy):
        """Raising the extra payment never adds months or interest."""
        results = [
            calculate_payoff_strategy(household_debts, strategy, extra)
            for extra in (0.0, 50.0, 100.0, 250.0, 500.0)
        ]

        for lower, higher in zip(results, results[1:]):
            assert higher.total_months <= lower.total_months
            assert higher.total_interest_paid <= lower.total_interest_paid + 1e-9


class TestRecommendation:
    def test_recommends_lowest_interest(self, two_debts):
        result = calculate_payoff_strategy(two_debts, PayoffStrategy.SNOWBALL, 50.00)
        assert result.summary.recommended_strategy is PayoffStrategy.AVALANCHE

    def test_tie_goes_to_earlier_strategy(self):
        """With one debt every ordering is identical, so SNOWBALL wins the tie."""
        debts = [make_debt(1, 1000.00, 12.0, 100.00)]
        assert recommend_strategy(debts, 0.0) is PayoffStrategy.SNOWBALL

    def test_falls_back_when_every_strategy_fails(self):
        debts = [make_debt(1, 10000.00, 12.0, 100.10)]
        assert (
            recommend_strategy(debts, 0.0, fallback=PayoffStrategy.CUSTOM)
            is PayoffStrategy.CUSTOM
        )


class TestSummary:
    def test_summary_counts(self, household_debts):
        result = calculate_payoff_strategy(household_debts, PayoffStrategy.AVALANCHE, 100.00)

        assert result.summary.total_debts == 3
        assert_float_equal(result.summary.total_starting_balance, 12300.00)

    def test_savings_against_minimum_only(self, household_debts):
        result = calculate_payoff_strategy(household_debts, PayoffStrategy.AVALANCHE, 200.00)

        assert result.summary.total_interest_saved > 0
        assert result.summary.months_saved > 0

    def test_savings_unavailable_when_baseline_fails(self):
        """A debt whose minimum alone runs past the cap has no baseline."""
        debts = [make_debt(1, 10000.00, 12.0, 100.10)]
        result = calculate_payoff_strategy(debts, PayoffStrategy.SNOWBALL, 100.00)

        assert result.summary.total_interest_saved is None
        assert result.summary.months_saved is None


class TestPerDebtSchedules:
    def test_order_and_payments(self, household_debts):
        result = calculate_payoff_strategy(household_debts, PayoffStrategy.SNOWBALL, 100.00)
        schedules = result.payoff_schedule

        assert [s.debt_id for s in schedules] == [3, 1, 2]
        assert [s.payoff_order for s in schedules] == [1, 2, 3]

        # Extra goes only to the first debt; the rest pay their minimum alone.
        first = calculate_loan_details(800.00, 17.0, 135.00)
        assert schedules[0].months_to_payoff == first.term_months
        second = calculate_loan_details(2500.00, 22.9, 75.00)
        assert schedules[1].months_to_payoff == second.term_months
        assert_float_equal(schedules[1].total_paid, 2500.00 + second.total_interest_paid)

    def test_rollover_finishes_no_later_than_slowest_debt(self, household_debts):
        """The aggregate is never slower than paying each debt on its own."""
        result = calculate_payoff_strategy(household_debts, PayoffStrategy.AVALANCHE, 60.00)
        assert result.total_months <= max(s.months_to_payoff for s in result.payoff_schedule)


class TestGuards:
    def test_empty_list_rejected(self):
        with pytest.raises(ValidationError):
            calculate_payoff_strategy([], PayoffStrategy.SNOWBALL)

    def test_only_inactive_debts_rejected(self):
        debts = [make_debt(1, 100.0, 5.0, 25.0, is_active=False)]
        with pytest.raises(ValidationError):
            calculate_payoff_strategy(debts, PayoffStrategy.SNOWBALL)

    def test_unmatched_ids_rejected(self, household_debts):
        with pytest.raises(ValidationError):
            calculate_payoff_strategy(household_debts, "SNOWBALL", debt_ids=[99])

    def test_ids_narrow_the_plan(self, household_debts):
        result = calculate_payoff_strategy(household_debts, "SNOWBALL", 50.0, debt_ids=[1, 3])
        assert {s.debt_id for s in result.payoff_schedule} == {1, 3}

    def test_negative_extra_rejected(self, household_debts):
        with pytest.raises(ValidationError):
            calculate_payoff_strategy(household_debts, "SNOWBALL", -10.00)

    def test_unknown_strategy_rejected(self, household_debts):
        with pytest.raises(ValidationError):
            calculate_payoff_strategy(household_debts, "FASTEST")

    def test_minimum_below_interest_rejected(self):
        debts = [
            make_debt(1, 500.00, 10.0, 50.00),
            make_debt(2, 1000.00, 24.0, 15.00),
        ]
        with pytest.raises(InsufficientPaymentError):
            calculate_payoff_strategy(debts, PayoffStrategy.SNOWBALL, 100.00)

    def test_extra_rescues_target_only(self):
        """Extra covers the first target's shortfall in the pre-check."""
        debts = [make_debt(1, 1000.00, 24.0, 15.00)]
        result = calculate_payoff_strategy(debts, PayoffStrategy.SNOWBALL, 100.00)
        assert result.total_months > 0

    def test_term_cap_raises(self):
        debts = [make_debt(1, 10000.00, 12.0, 100.10)]
        with pytest.raises(TermExceededError):
            calculate_payoff_strategy(debts, PayoffStrategy.AVALANCHE)
