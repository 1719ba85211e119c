"""ratesense amortize / compare / presets — fixed-rate loan calculators."""

from __future__ import annotations

import click
from rich.table import Table

from ratesense.core.cli.common import (
    console,
    get_settings,
    handles_errors,
    payoff_note,
    schedule_table,
    summary_table,
)
from ratesense.financial.calculators.scenarios import LOAN_PRESETS, HousingCosts, compare_loans
from ratesense.financial.export import fmt_pct, fmt_usd
from ratesense.financial.models import LoanSpec
from ratesense.financial.session import CalculatorSession
from ratesense.financial.validation import validate_loan_inputs

LOAN_TYPES = ("mortgage", "auto", "student", "personal")


@click.command()
@click.option("--principal", "-p", type=float, required=True, help="Loan balance.")
@click.option("--apr", type=float, required=True, help="APR in percent (6.5 = 6.5%).")
@click.option("--years", type=float, required=True, help="Loan term in years.")
@click.option("--extra", type=float, default=0.0, show_default=True, help="Extra principal paid each month.")
@click.option("--delta", type=float, default=0.0, show_default=True, help="APR change for the what-if scenario.")
@click.option("--loan-type", type=click.Choice(LOAN_TYPES), default="mortgage", show_default=True)
@click.option("--tax", type=float, default=0.0, help="Annual property tax (mortgage only).")
@click.option("--insurance", type=float, default=0.0, help="Annual home insurance (mortgage only).")
@click.option("--hoa", type=float, default=0.0, help="Monthly HOA dues (mortgage only).")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the schedule as CSV. A bare file name goes under paths.export_dir.",
)
@click.option("--share", is_flag=True, help="Print a share-link query for these inputs.")
@click.option("--summary", "show_summary", is_flag=True, help="Print the plain-text summary.")
@click.pass_context
@handles_errors
def amortize(
    ctx: click.Context,
    principal: float,
    apr: float,
    years: float,
    extra: float,
    delta: float,
    loan_type: str,
    tax: float,
    insurance: float,
    hoa: float,
    csv_path: str | None,
    share: bool,
    show_summary: bool,
) -> None:
    """Amortize a loan and compare it against a rate change."""
    settings = get_settings(ctx)
    session = CalculatorSession(rate_deltas=tuple(settings.calculator.rate_deltas))
    housing = HousingCosts(annual_tax=tax, annual_insurance=insurance, monthly_hoa=hoa)

    result = session.calculate(principal, apr, years, extra=extra, delta=delta, loan_type=loan_type, housing=housing)
    base, scen = result.baseline, result.scenario

    rows = [
        ("Baseline monthly", fmt_usd(base.scheduled_payment)),
        ("Payoff time", payoff_note(base)),
        ("Baseline interest", fmt_usd(base.total_interest)),
        ("Total paid", fmt_usd(base.total_paid)),
    ]
    if delta:
        rows += [
            (f"Monthly at {fmt_pct(result.new_apr)}", fmt_usd(scen.scheduled_payment)),
            ("Monthly change", f"{fmt_usd(result.payment_delta)} ({fmt_pct(result.payment_delta_pct * 100)})"),
            (f"Interest at {fmt_pct(result.new_apr)}", fmt_usd(scen.total_interest)),
            ("Interest change", fmt_usd(result.interest_delta)),
        ]
    if result.has_housing_costs:
        rows += [
            ("Housing add-ons", fmt_usd(result.housing.monthly)),
            ("All-in housing (baseline)", fmt_usd(result.baseline_housing_payment)),
            ("All-in housing (scenario)", fmt_usd(result.scenario_housing_payment)),
        ]
    console.print(summary_table(f"{loan_type.title()} loan {fmt_usd(principal)} at {fmt_pct(apr)}", rows))

    table = Table(title="Rate scenarios")
    for name in ("APR", "Monthly", "Total interest", "Monthly Δ", "Interest Δ"):
        table.add_column(name, justify="right")
    for row in session.scenario_rows:
        no_change = row.delta == 0
        table.add_row(
            fmt_pct(row.apr),
            fmt_usd(row.monthly_payment),
            fmt_usd(row.total_interest),
            "—" if no_change else fmt_usd(row.monthly_delta),
            "—" if no_change else fmt_usd(row.interest_delta),
        )
    console.print(table)
    console.print(schedule_table(base, settings.calculator.table_rows, title="Baseline schedule"))

    if csv_path:
        written = session.export_csv(settings.paths.export_path(csv_path))
        click.echo(f"Schedule written to {written}")
    if share:
        click.echo(f"?{session.share_query()}")
    if show_summary:
        click.echo(session.summary)


@click.command()
@click.option("--principal-a", type=float, required=True)
@click.option("--apr-a", type=float, required=True)
@click.option("--years-a", type=float, required=True)
@click.option("--extra-a", type=float, default=0.0)
@click.option("--principal-b", type=float, default=None, help="Defaults to loan A's principal.")
@click.option("--apr-b", type=float, required=True)
@click.option("--years-b", type=float, default=None, help="Defaults to loan A's term.")
@click.option("--extra-b", type=float, default=0.0)
@handles_errors
def compare(
    principal_a: float,
    apr_a: float,
    years_a: float,
    extra_a: float,
    principal_b: float | None,
    apr_b: float,
    years_b: float | None,
    extra_b: float,
) -> None:
    """Compare two loans side by side."""
    loan_a = LoanSpec.from_years(principal_a, years_a, extra_a)
    loan_b = LoanSpec.from_years(
        principal_a if principal_b is None else principal_b,
        years_a if years_b is None else years_b,
        extra_b,
    )
    validate_loan_inputs(loan_a.principal, apr_a, loan_a.term_months, loan_a.extra_monthly)
    validate_loan_inputs(loan_b.principal, apr_b, loan_b.term_months, loan_b.extra_monthly)

    result = compare_loans(loan_a, apr_a, loan_b, apr_b)
    a, b = result.schedule_a, result.schedule_b

    table = Table(title="Loan comparison")
    table.add_column("")
    table.add_column(result.label_a, justify="right")
    table.add_column(result.label_b, justify="right")
    table.add_column("B − A", justify="right")
    table.add_row("APR", fmt_pct(apr_a), fmt_pct(apr_b), fmt_pct(apr_b - apr_a))
    table.add_row(
        "Monthly", fmt_usd(a.scheduled_payment), fmt_usd(b.scheduled_payment), fmt_usd(result.payment_difference)
    )
    table.add_row(
        "Total interest", fmt_usd(a.total_interest), fmt_usd(b.total_interest), fmt_usd(result.interest_difference)
    )
    table.add_row("Total paid", fmt_usd(a.total_paid), fmt_usd(b.total_paid), fmt_usd(result.total_paid_difference))
    table.add_row("Months", str(a.month_count), str(b.month_count), f"{result.months_difference:+d}")
    console.print(table)
    click.echo(f"Less interest: {result.cheaper}")


@click.command()
def presets() -> None:
    """List built-in example loans and stress presets."""
    from ratesense.financial.calculators.stress import STEP_PRESETS

    table = Table(title="Example loans")
    for name in ("Name", "Type", "Balance", "APR", "Term", "Notes"):
        table.add_column(name)
    for name, preset in LOAN_PRESETS.items():
        term = f"{preset.term_years:g}y" if preset.term_years else "—"
        table.add_row(name, preset.loan_type, fmt_usd(preset.principal), fmt_pct(preset.apr), term, preset.description)
    console.print(table)

    stress_table = Table(title="Stress presets")
    for name in ("Name", "Step", "Every", "For"):
        stress_table.add_column(name)
    for name, policy in STEP_PRESETS.items():
        stress_table.add_row(
            name, f"+{policy.step_size:.2f}%", f"{policy.every_months} mo", f"{policy.duration_months} mo"
        )
    console.print(stress_table)
