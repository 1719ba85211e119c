"""What-if comparisons built on top of the amortization engine.

- Rate change: the same loan at APR and APR + delta, with optional
  property tax / insurance / HOA folded into an all-in housing payment.
- Rate delta table: one independent run per delta, reported against the
  delta = 0 baseline.
- Loan comparison: two different loans side by side.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ratesense.financial.calculators.amortization import run_amortization
from ratesense.financial.models import LoanSpec, Schedule

DEFAULT_RATE_DELTAS = (0.0, 0.25, 0.5, 1.0)


@dataclass(frozen=True)
class HousingCosts:
    """Non-loan monthly housing costs added on top of a mortgage payment."""

    annual_tax: float = 0.0
    annual_insurance: float = 0.0
    monthly_hoa: float = 0.0

    @property
    def monthly(self) -> float:
        return self.annual_tax / 12 + self.annual_insurance / 12 + self.monthly_hoa


@dataclass(frozen=True)
class RateChangeComparison:
    """Baseline loan against the same loan at a shifted APR."""

    apr: float
    new_apr: float
    baseline: Schedule
    scenario: Schedule
    housing: HousingCosts | None = None

    @property
    def payment_delta(self) -> float:
        return self.scenario.scheduled_payment - self.baseline.scheduled_payment

    @property
    def payment_delta_pct(self) -> float:
        if self.baseline.scheduled_payment == 0:
            return 0.0
        return self.payment_delta / self.baseline.scheduled_payment

    @property
    def interest_delta(self) -> float:
        return self.scenario.total_interest - self.baseline.total_interest

    @property
    def has_housing_costs(self) -> bool:
        return self.housing is not None and self.housing.monthly > 0

    @property
    def baseline_housing_payment(self) -> float | None:
        if not self.has_housing_costs:
            return None
        return self.baseline.scheduled_payment + self.housing.monthly

    @property
    def scenario_housing_payment(self) -> float | None:
        if not self.has_housing_costs:
            return None
        return self.scenario.scheduled_payment + self.housing.monthly


@dataclass(frozen=True)
class ScenarioRow:
    """One line of the rate delta table."""

    delta: float
    apr: float
    monthly_payment: float
    total_interest: float
    months: int
    monthly_delta: float
    interest_delta: float


@dataclass(frozen=True)
class LoanComparison:
    """Two loans side by side. Differences are B minus A."""

    label_a: str
    label_b: str
    schedule_a: Schedule
    schedule_b: Schedule

    @property
    def payment_difference(self) -> float:
        return self.schedule_b.scheduled_payment - self.schedule_a.scheduled_payment

    @property
    def interest_difference(self) -> float:
        return self.schedule_b.total_interest - self.schedule_a.total_interest

    @property
    def total_paid_difference(self) -> float:
        return self.schedule_b.total_paid - self.schedule_a.total_paid

    @property
    def months_difference(self) -> int:
        return self.schedule_b.month_count - self.schedule_a.month_count

    @property
    def cheaper(self) -> str:
        """Label of the loan with less total interest (A on a tie)."""
        return self.label_b if self.interest_difference < 0 else self.label_a


@dataclass(frozen=True)
class LoanPreset:
    """Canned example inputs for the calculator."""

    loan_type: str
    principal: float
    apr: float
    term_years: float | None = None
    extra: float = 0.0
    housing: HousingCosts | None = None
    card_mode: str | None = None
    card_fixed_payment: float | None = None
    description: str = field(default="", compare=False)


LOAN_PRESETS: dict[str, LoanPreset] = {
    "mortgage350": LoanPreset(
        loan_type="mortgage",
        principal=350_000,
        apr=6.5,
        term_years=30,
        housing=HousingCosts(annual_tax=7_200, annual_insurance=1_800),
        description="$350k 30-year mortgage with taxes and insurance",
    ),
    "auto25": LoanPreset(loan_type="auto", principal=25_000, apr=7.9, term_years=5, description="$25k 5-year auto loan"),
    "student40": LoanPreset(
        loan_type="student", principal=40_000, apr=6.0, term_years=10, description="$40k 10-year student loan"
    ),
    "cc4k": LoanPreset(
        loan_type="creditcard",
        principal=4_000,
        apr=24.0,
        card_mode="fixed",
        card_fixed_payment=200,
        description="$4k credit card at 24% paying $200/mo",
    ),
}


def compare_rate_change(
    principal: float,
    apr: float,
    delta: float,
    term_months: int,
    extra_monthly: float = 0.0,
    housing: HousingCosts | None = None,
) -> RateChangeComparison:
    """Run the loan at ``apr`` and at ``apr + delta``."""
    baseline = run_amortization(principal, apr, term_months, extra_monthly)
    scenario = run_amortization(principal, apr + delta, term_months, extra_monthly)
    return RateChangeComparison(apr=apr, new_apr=apr + delta, baseline=baseline, scenario=scenario, housing=housing)


def rate_delta_table(
    principal: float,
    apr: float,
    term_months: int,
    extra_monthly: float = 0.0,
    deltas: Iterable[float] = DEFAULT_RATE_DELTAS,
) -> list[ScenarioRow]:
    """Independently re-run the loan for each APR shift.

    Deltas in payment and interest are relative to the unshifted loan,
    whether or not 0 is among ``deltas``.
    """
    baseline = run_amortization(principal, apr, term_months, extra_monthly)

    rows = []
    for delta in deltas:
        schedule = run_amortization(principal, apr + delta, term_months, extra_monthly)
        rows.append(
            ScenarioRow(
                delta=delta,
                apr=apr + delta,
                monthly_payment=schedule.scheduled_payment,
                total_interest=schedule.total_interest,
                months=schedule.month_count,
                monthly_delta=schedule.scheduled_payment - baseline.scheduled_payment,
                interest_delta=schedule.total_interest - baseline.total_interest,
            )
        )
    return rows


def compare_loans(
    loan_a: LoanSpec,
    apr_a: float,
    loan_b: LoanSpec,
    apr_b: float,
    label_a: str = "Loan A",
    label_b: str = "Loan B",
) -> LoanComparison:
    """Amortize two loans independently and compare them."""
    schedule_a = run_amortization(loan_a.principal, apr_a, loan_a.term_months, loan_a.extra_monthly)
    schedule_b = run_amortization(loan_b.principal, apr_b, loan_b.term_months, loan_b.extra_monthly)
    return LoanComparison(label_a=label_a, label_b=label_b, schedule_a=schedule_a, schedule_b=schedule_b)
