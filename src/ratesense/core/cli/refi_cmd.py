"""ratesense refinance — break-even on a refinance."""

from __future__ import annotations

import click

from ratesense.core.cli.common import console, handles_errors, summary_table
from ratesense.financial.calculators.refinance import refinance_breakeven
from ratesense.financial.export import fmt_pct, fmt_usd
from ratesense.financial.validation import validate_loan_inputs, validate_refinance_inputs


@click.command()
@click.option("--principal", "-p", type=float, required=True, help="Balance being refinanced.")
@click.option("--apr", type=float, required=True, help="Current APR in percent.")
@click.option("--new-apr", type=float, required=True, help="Refinance APR in percent.")
@click.option("--years", type=float, required=True, help="Loan term in years.")
@click.option("--extra", type=float, default=0.0, show_default=True)
@click.option("--closing-costs", type=float, required=True, help="One-time refinance cost.")
@click.option("--keep-years", type=float, default=None, help="How long you expect to keep the loan (default: full term).")
@handles_errors
def refinance(
    principal: float,
    apr: float,
    new_apr: float,
    years: float,
    extra: float,
    closing_costs: float,
    keep_years: float | None,
) -> None:
    """Find when a refinance pays for itself."""
    term_months = round(years * 12)
    keep_months = term_months if keep_years is None else round(keep_years * 12)
    validate_loan_inputs(principal, apr, term_months, extra)
    validate_loan_inputs(principal, new_apr, term_months, extra)
    validate_refinance_inputs(closing_costs, keep_months)

    result = refinance_breakeven(principal, apr, new_apr, term_months, extra, closing_costs, keep_months)

    if result.breakeven_month is None:
        breakeven = f"Not within {result.horizon_months} months"
    else:
        breakeven = f"Month {result.breakeven_month} ({result.breakeven_month / 12:.1f} years)"

    rows = [
        ("Current payment", fmt_usd(result.baseline.base_payment)),
        ("New payment", fmt_usd(result.refinanced.base_payment)),
        ("Monthly savings", fmt_usd(result.monthly_savings)),
        ("Break-even", breakeven),
        (f"Net savings over {result.horizon_months} months", fmt_usd(result.net_savings)),
    ]
    console.print(summary_table(f"Refinance {fmt_pct(apr)} → {fmt_pct(new_apr)}", rows))
