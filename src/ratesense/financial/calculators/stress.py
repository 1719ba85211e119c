"""Rate-shock and ARM-reset stress testing.

Runs a loan against a rising rate path and reports how bad the payment
gets. The risk label compares the worst payment to the month-1 payment:

    jump <= 10%  -> Low
    jump <= 25%  -> Moderate
    jump <= 45%  -> High
    otherwise    -> Severe

Thresholds are fixed policy.
"""

from __future__ import annotations

from loguru import logger

from ratesense.financial.calculators.amortization import run_amortization
from ratesense.financial.calculators.rate_curve import (
    ARMResetPolicy,
    FlatPolicy,
    RateCurve,
    StepShockPolicy,
    build_rate_curve,
)
from ratesense.financial.models import RiskLabel, StressOutcome

RISK_BANDS: tuple[tuple[float, RiskLabel], ...] = (
    (0.10, RiskLabel.LOW),
    (0.25, RiskLabel.MODERATE),
    (0.45, RiskLabel.HIGH),
)

STEP_PRESETS: dict[str, StepShockPolicy] = {
    "gentle": StepShockPolicy(step_size=0.25, every_months=6, duration_months=24),
    "moderate": StepShockPolicy(step_size=0.25, every_months=3, duration_months=24),
    "shock": StepShockPolicy(step_size=0.50, every_months=3, duration_months=18),
}


def step_preset(name: str, cap_apr: float | None = None) -> StepShockPolicy:
    """Look up a named step-shock preset, optionally with a rate cap."""
    try:
        preset = STEP_PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown stress preset {name!r}; choose from {sorted(STEP_PRESETS)}") from None
    return StepShockPolicy(preset.step_size, preset.every_months, preset.duration_months, cap_apr=cap_apr)


def classify_risk(start_payment: float, worst_payment: float) -> RiskLabel | None:
    """Bucket the relative jump from the starting to the worst payment.

    Returns None when either payment is not positive.
    """
    if start_payment <= 0 or worst_payment <= 0:
        return None
    # Raw float ratio, unrounded: a jump of exactly 10% can land a hair above 0.10.
    jump = (worst_payment - start_payment) / start_payment
    for limit, label in RISK_BANDS:
        if jump <= limit:
            return label
    return RiskLabel.SEVERE


def run_stress(
    principal: float,
    term_months: int,
    start_apr: float,
    extra_monthly: float,
    rate_curve: RateCurve | StepShockPolicy | ARMResetPolicy | FlatPolicy,
    simulation_cap_months: int | None = None,
) -> StressOutcome:
    """Amortize a loan on a variable rate path and measure the damage.

    Args:
        principal: Starting balance.
        term_months: Original term; resets re-amortize over what is left of it.
        start_apr: APR in month 1, used when ``rate_curve`` is a policy.
        extra_monthly: Extra principal paid every month.
        rate_curve: A built curve, or a policy to build against ``start_apr``.
        simulation_cap_months: Simulate only this many months.

    Returns:
        StressOutcome with the schedule, worst payment, peak rate and risk label.
    """
    curve = rate_curve if isinstance(rate_curve, RateCurve) else build_rate_curve(start_apr, rate_curve)
    schedule = run_amortization(principal, curve, term_months, extra_monthly, max_months=simulation_cap_months)

    worst_month, worst_payment = 1, 0.0
    peak_month, peak_rate = 1, curve.rate_at(1)
    for row in schedule.rows:
        if row.payment > worst_payment:
            worst_month, worst_payment = row.month, row.payment
        if row.apr_percent > peak_rate:
            peak_month, peak_rate = row.month, row.apr_percent

    risk = classify_risk(schedule.base_payment, worst_payment)
    logger.debug(
        f"Stress run: {schedule.month_count} months, worst ${worst_payment:,.2f} in month {worst_month}, "
        f"peak {peak_rate:.3f}% in month {peak_month}, risk={risk.value if risk else None}"
    )

    return StressOutcome(
        schedule=schedule,
        worst_month=worst_month,
        worst_payment=worst_payment,
        peak_rate=peak_rate,
        peak_month=peak_month,
        risk_label=risk,
    )
