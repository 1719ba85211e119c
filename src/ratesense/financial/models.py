"""Core loan-simulation data models.

Plain value objects produced by the calculators. Every entity here is
created fresh per calculation and never mutated after the engine that
built it returns. Currency is in dollars as ``float``; rates are APR in
percent (6.5 means 6.5%). No rounding is applied here; formatting is
the caller's concern.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Balance at or below this is treated as paid off.
ZERO_BALANCE_EPSILON = 0.01

# Safety ceilings on the monthly loops.
MAX_LOAN_MONTHS = 1200
MAX_CARD_MONTHS = 600


@dataclass(frozen=True)
class LoanSpec:
    """Immutable description of a loan at simulation start.

    Attributes:
        principal: Amount borrowed (> 0).
        term_months: Amortization term in months (> 0).
        extra_monthly: Extra principal paid every month on top of the
            scheduled payment (>= 0).
    """

    principal: float
    term_months: int
    extra_monthly: float = 0.0

    @classmethod
    def from_years(cls, principal: float, term_years: float, extra_monthly: float = 0.0) -> LoanSpec:
        return cls(principal=principal, term_months=round(term_years * 12), extra_monthly=extra_monthly)


@dataclass(frozen=True)
class RatePoint:
    """APR in effect for one month (1-based)."""

    month: int
    apr_percent: float


@dataclass(frozen=True)
class ScheduleRow:
    """One simulated month.

    ``payment == interest_portion + principal_portion`` up to float rounding.
    ``principal_portion`` is negative when the payment does not cover the
    month's interest (the balance grows).
    """

    month: int
    apr_percent: float
    payment: float
    interest_portion: float
    principal_portion: float
    ending_balance: float


@dataclass(frozen=True)
class Schedule:
    """Ordered month-by-month result of an amortization run.

    Attributes:
        rows: Months 1..n with no gaps.
        principal: Starting balance the schedule was run against.
        scheduled_payment: Amortized payment computed for month 1,
            excluding any extra payment.
    """

    rows: tuple[ScheduleRow, ...]
    principal: float
    scheduled_payment: float = 0.0

    @property
    def month_count(self) -> int:
        return len(self.rows)

    @property
    def base_payment(self) -> float:
        """Payment actually made in month 1 (0 for an empty schedule)."""
        return self.rows[0].payment if self.rows else 0.0

    @property
    def total_interest(self) -> float:
        return sum(r.interest_portion for r in self.rows)

    @property
    def total_paid(self) -> float:
        return sum(r.payment for r in self.rows)

    @property
    def total_principal(self) -> float:
        return sum(r.principal_portion for r in self.rows)

    @property
    def final_balance(self) -> float:
        return self.rows[-1].ending_balance if self.rows else self.principal

    @property
    def paid_off(self) -> bool:
        return self.final_balance <= ZERO_BALANCE_EPSILON

    def balance_at(self, month: int) -> float:
        """Outstanding balance at the end of ``month`` (0 once paid off)."""
        if month <= 0 or not self.rows:
            return self.principal
        if month > len(self.rows):
            return self.rows[-1].ending_balance
        return self.rows[month - 1].ending_balance

    def payment_at(self, month: int) -> float:
        """Payment made in ``month``, or 0 past the end of the schedule."""
        if 1 <= month <= len(self.rows):
            return self.rows[month - 1].payment
        return 0.0

    def paid_through(self, month: int) -> float:
        """Sum of payments for months 1..month."""
        return sum(r.payment for r in self.rows[: max(0, month)])


@dataclass(frozen=True)
class CreditCardOutcome:
    """Result of a revolving-balance payoff simulation.

    ``paid_off`` is False when the run stopped on the 600-month ceiling or
    because the payment could not outpace interest.
    """

    months_to_payoff: int
    total_interest: float
    total_paid: float
    paid_off: bool
    final_balance: float = 0.0
    rows: tuple[ScheduleRow, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class RefinanceResult:
    """Break-even and net savings of refinancing over a holding horizon.

    Attributes:
        breakeven_month: First month cumulative payment savings cover the
            closing costs, or None if never reached within the horizon.
        net_savings: Positive means refinancing saves money over the horizon.
        horizon_months: Months actually compared.
        monthly_savings: Month-1 payment difference (baseline - refinance).
    """

    breakeven_month: int | None
    net_savings: float
    horizon_months: int = 0
    monthly_savings: float = 0.0
    baseline: Schedule | None = field(default=None, repr=False)
    refinanced: Schedule | None = field(default=None, repr=False)


class RiskLabel(Enum):
    """How far the worst simulated payment climbs above the starting one."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    SEVERE = "Severe"


@dataclass(frozen=True)
class StressOutcome:
    """Variable-rate schedule plus its worst-case metrics."""

    schedule: Schedule
    worst_month: int
    worst_payment: float
    peak_rate: float
    peak_month: int
    risk_label: RiskLabel | None

    @property
    def start_payment(self) -> float:
        return self.schedule.base_payment

    @property
    def payment_increase_pct(self) -> float:
        """Relative jump from month-1 payment to the worst payment (0.25 = +25%)."""
        start = self.start_payment
        if start <= 0:
            return 0.0
        return (self.worst_payment - start) / start

    @property
    def total_interest(self) -> float:
        return self.schedule.total_interest

    @property
    def month_count(self) -> int:
        return self.schedule.month_count
