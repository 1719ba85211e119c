"""ratesense stress — rate-shock and ARM reset stress tests."""

from __future__ import annotations

import click

from ratesense.core.cli.common import (
    console,
    get_settings,
    handles_errors,
    payoff_note,
    schedule_table,
    summary_table,
)
from ratesense.core.exceptions import InvalidInputError
from ratesense.financial.calculators.rate_curve import (
    ARMResetPolicy,
    ConstantIndex,
    FeedIndex,
    ManualIndex,
    StepShockPolicy,
)
from ratesense.financial.calculators.stress import STEP_PRESETS, run_stress, step_preset
from ratesense.financial.export import fmt_pct, fmt_usd
from ratesense.financial.models import StressOutcome
from ratesense.financial.validation import parse_manual_schedule, validate_loan_inputs

INDEX_MODES = ("constant", "manual", "feed")


def _loan_options(fn):
    for option in reversed(
        [
            click.option("--principal", "-p", type=float, required=True, help="Starting balance."),
            click.option("--apr", type=float, required=True, help="Starting APR in percent."),
            click.option("--years", type=float, required=True, help="Original term in years."),
            click.option("--extra", type=float, default=0.0, show_default=True),
        ]
    ):
        fn = option(fn)
    return fn


def _render(ctx: click.Context, title: str, outcome: StressOutcome) -> None:
    schedule = outcome.schedule
    risk = outcome.risk_label.value if outcome.risk_label else "—"
    rows = [
        ("Starting payment", fmt_usd(outcome.start_payment)),
        ("Worst payment", f"{fmt_usd(outcome.worst_payment)} (month {outcome.worst_month})"),
        ("Payment increase", fmt_pct(outcome.payment_increase_pct * 100)),
        ("Peak rate", f"{fmt_pct(outcome.peak_rate)} (month {outcome.peak_month})"),
        ("Total interest", fmt_usd(outcome.total_interest)),
        ("Simulated", payoff_note(schedule)),
        ("Risk", risk),
    ]
    console.print(summary_table(title, rows))
    console.print(schedule_table(schedule, get_settings(ctx).calculator.table_rows, show_apr=True))


@click.group()
def stress() -> None:
    """Stress-test a loan against rising rates."""


@stress.command()
@_loan_options
@click.option("--preset", type=click.Choice(sorted(STEP_PRESETS)), default=None, help="Use a canned step path.")
@click.option("--step", type=float, default=None, help="APR increase per step (percentage points).")
@click.option("--every", type=int, default=None, help="Months between steps.")
@click.option("--duration", type=int, default=None, help="Months during which steps apply.")
@click.option("--cap", type=float, default=None, help="Maximum APR.")
@click.pass_context
@handles_errors
def steps(
    ctx: click.Context,
    principal: float,
    apr: float,
    years: float,
    extra: float,
    preset: str | None,
    step: float | None,
    every: int | None,
    duration: int | None,
    cap: float | None,
) -> None:
    """Raise the rate in fixed steps."""
    term_months = round(years * 12)
    validate_loan_inputs(principal, apr, term_months, extra)

    if preset:
        policy = step_preset(preset, cap_apr=cap)
    elif step is None or every is None or duration is None:
        raise InvalidInputError("Give --preset, or all of --step, --every and --duration.")
    else:
        policy = StepShockPolicy(step_size=step, every_months=every, duration_months=duration, cap_apr=cap)

    outcome = run_stress(principal, term_months, apr, extra, policy)
    _render(ctx, f"Step shock +{policy.step_size:.2f}% every {policy.every_months} mo", outcome)


@stress.command()
@_loan_options
@click.option("--fixed-years", type=float, default=None, help="Years at the starting rate.")
@click.option("--adjust-every", type=int, default=None, help="Months between resets.")
@click.option("--index-mode", type=click.Choice(INDEX_MODES), default="constant", show_default=True)
@click.option("--index-value", type=float, default=None, help="Index rate (constant), or last fetched value (feed).")
@click.option("--index-schedule", default=None, help='Index per reset, e.g. "4.5, 5.0, 5.5" (manual).')
@click.option("--margin", type=float, default=0.0, show_default=True)
@click.option("--periodic-cap", type=float, default=None)
@click.option("--lifetime-cap", type=float, default=None, help="Max rate above the starting APR.")
@click.option("--floor", type=float, default=None, help="Minimum APR.")
@click.option("--sim-years", type=float, default=None, help="Only simulate this many years.")
@click.pass_context
@handles_errors
def arm(
    ctx: click.Context,
    principal: float,
    apr: float,
    years: float,
    extra: float,
    fixed_years: float | None,
    adjust_every: int | None,
    index_mode: str,
    index_value: float | None,
    index_schedule: str | None,
    margin: float,
    periodic_cap: float | None,
    lifetime_cap: float | None,
    floor: float | None,
    sim_years: float | None,
) -> None:
    """Adjustable-rate loan with index + margin resets."""
    term_months = round(years * 12)
    validate_loan_inputs(principal, apr, term_months, extra)
    defaults = get_settings(ctx).stress

    if index_mode == "manual":
        values = parse_manual_schedule(index_schedule)
        if not values:
            raise InvalidInputError("Manual index mode needs --index-schedule with at least one number.")
        index = ManualIndex(values)
    elif index_mode == "feed":
        index = FeedIndex(latest=index_value)
    else:
        index = ConstantIndex(apr if index_value is None else index_value)

    policy = ARMResetPolicy(
        fixed_years=defaults.arm_fixed_years if fixed_years is None else fixed_years,
        adjust_every_months=defaults.arm_adjust_every_months if adjust_every is None else adjust_every,
        index=index,
        margin=margin,
        periodic_cap=periodic_cap,
        lifetime_cap_above_start=lifetime_cap,
        floor_apr=floor,
    )
    sim_months = None if sim_years is None else round(sim_years * 12)

    outcome = run_stress(principal, term_months, apr, extra, policy, simulation_cap_months=sim_months)
    _render(ctx, f"ARM {policy.fixed_years:g}y fixed, resets every {policy.adjust_every_months} mo", outcome)
