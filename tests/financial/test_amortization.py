"""Tests for ratesense.financial.calculators.amortization."""

import pytest

from ratesense.financial.calculators.amortization import (
    monthly_payment,
    payment_for_remaining_months,
    run_amortization,
)
from ratesense.financial.calculators.rate_curve import StepShockPolicy, build_rate_curve, flat_curve
from ratesense.financial.models import MAX_LOAN_MONTHS


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        # $500k, 7%, 30 years -> ~$3,327/mo
        assert monthly_payment(500_000, 7.0, 360) == pytest.approx(3_326.51, abs=0.01)

    def test_auto_loan(self):
        # $25k, 7.9%, 5 years -> ~$505.72/mo
        assert monthly_payment(25_000, 7.9, 60) == pytest.approx(505.72, abs=0.05)

    def test_zero_rate_is_exact_division(self):
        assert monthly_payment(12_000, 0, 48) == 12_000 / 48
        assert monthly_payment(350_000, 0.0, 360) == 350_000 / 360

    def test_remaining_months_floor_of_one(self):
        assert payment_for_remaining_months(1_000, 0, 0) == 1_000
        assert payment_for_remaining_months(1_000, 12.0, -5) == pytest.approx(1_010)


class TestFixedRateSchedule:
    def test_zero_rate_runs_exactly_term(self):
        schedule = run_amortization(24_000, 0, 48)
        assert schedule.month_count == 48
        assert schedule.total_interest == 0
        assert schedule.paid_off

    def test_full_term_payoff(self):
        schedule = run_amortization(350_000, 6.5, 360)
        assert schedule.month_count == 360
        assert schedule.paid_off
        assert schedule.base_payment == pytest.approx(2_212.24, abs=0.01)
        assert schedule.total_paid == pytest.approx(schedule.base_payment * schedule.month_count, abs=1.0)

    def test_length_never_exceeds_term(self):
        for apr in (0, 3.0, 6.5, 12.0, 24.0):
            assert run_amortization(40_000, apr, 120).month_count <= 120

    def test_row_invariants(self):
        schedule = run_amortization(25_000, 7.9, 60, extra_monthly=50)
        balance = 25_000.0
        for expected_month, row in enumerate(schedule.rows, start=1):
            assert row.month == expected_month
            assert row.payment == pytest.approx(row.interest_portion + row.principal_portion)
            assert row.ending_balance == pytest.approx(max(0.0, balance - row.principal_portion), abs=1e-6)
            assert row.ending_balance >= 0
            balance = row.ending_balance

    def test_interest_on_starting_balance(self):
        schedule = run_amortization(120_000, 6.0, 360)
        assert schedule.rows[0].interest_portion == pytest.approx(600.0)

    def test_totals(self):
        schedule = run_amortization(40_000, 6.0, 120)
        assert schedule.total_principal == pytest.approx(40_000, abs=0.02)
        assert schedule.total_paid == pytest.approx(40_000 + schedule.total_interest, abs=0.02)

    def test_last_payment_never_overpays(self):
        schedule = run_amortization(10_000, 5.0, 36, extra_monthly=1_000)
        last = schedule.rows[-1]
        assert last.payment <= schedule.rows[0].payment
        assert last.ending_balance == 0

    def test_idempotent(self):
        first = run_amortization(250_000, 5.75, 360, extra_monthly=125)
        second = run_amortization(250_000, 5.75, 360, extra_monthly=125)
        assert first == second

    def test_plain_rate_matches_flat_curve(self):
        assert run_amortization(80_000, 4.5, 180) == run_amortization(80_000, flat_curve(4.5), 180)

    def test_scheduled_payment_excludes_extra(self):
        schedule = run_amortization(100_000, 6.0, 360, extra_monthly=200)
        assert schedule.scheduled_payment == pytest.approx(monthly_payment(100_000, 6.0, 360))
        assert schedule.base_payment == pytest.approx(schedule.scheduled_payment + 200)

    @pytest.mark.parametrize("principal, apr, term", [(25_000, 7.9, 60), (1_234.56, 3.3, 7), (350_000, 6.5, 360)])
    def test_paid_off_balance_is_exactly_zero(self, principal, apr, term):
        schedule = run_amortization(principal, apr, term)
        assert schedule.paid_off
        assert schedule.rows[-1].ending_balance == 0.0
        assert schedule.final_balance == 0.0
        assert schedule.balance_at(term + 12) == 0.0

    def test_balance_lookup(self):
        schedule = run_amortization(10_000, 0, 10)
        assert schedule.balance_at(0) == 10_000
        assert schedule.balance_at(3) == pytest.approx(7_000)
        assert schedule.balance_at(99) == schedule.final_balance
        assert schedule.payment_at(11) == 0


class TestExtraPayments:
    def test_extra_strictly_reduces_interest_and_length(self):
        previous = run_amortization(300_000, 6.5, 360)
        for extra in (100, 250, 500, 1_000, 5_000):
            schedule = run_amortization(300_000, 6.5, 360, extra_monthly=extra)
            assert schedule.total_interest < previous.total_interest
            assert schedule.month_count < previous.month_count
            previous = schedule

    def test_huge_extra_pays_in_one_month(self):
        schedule = run_amortization(5_000, 6.0, 60, extra_monthly=1_000_000)
        assert schedule.month_count == 1
        assert schedule.rows[0].payment == pytest.approx(5_000 * (1 + 0.005))


class TestVariableRate:
    def test_payment_resets_when_rate_changes(self):
        curve = build_rate_curve(5.0, StepShockPolicy(step_size=1.0, every_months=12, duration_months=13))
        schedule = run_amortization(200_000, curve, 360)
        first, month_13 = schedule.rows[0], schedule.rows[12]
        assert month_13.apr_percent == 6.0
        expected = payment_for_remaining_months(schedule.balance_at(12), 6.0, 348)
        assert month_13.payment == pytest.approx(expected)
        assert month_13.payment > first.payment
        # Term holds: the loan still amortizes over 360 months
        assert schedule.month_count == 360
        assert schedule.paid_off

    def test_payment_constant_between_changes(self):
        curve = build_rate_curve(5.0, StepShockPolicy(step_size=0.5, every_months=6, duration_months=7))
        schedule = run_amortization(150_000, curve, 360)
        payments = {round(r.payment, 6) for r in schedule.rows[6:300]}
        assert len(payments) == 1

    def test_max_months_truncates(self):
        schedule = run_amortization(200_000, 6.0, 360, max_months=60)
        assert schedule.month_count == 60
        assert not schedule.paid_off


class TestDegenerate:
    def test_ceiling_is_1200_months(self, log_messages):
        # Payment barely above interest: almost no principal moves each month
        schedule = run_amortization(100_000, 12.0, 2_400)
        assert schedule.month_count == MAX_LOAN_MONTHS
        assert not schedule.paid_off
        assert any("not paid off" in m for m in log_messages)

    def test_tiny_principal_yields_no_rows(self):
        schedule = run_amortization(0.005, 5.0, 12)
        assert schedule.month_count == 0
        assert schedule.base_payment == 0
        assert schedule.paid_off
