"""ratesense card — credit card payoff."""

from __future__ import annotations

import click

from ratesense.core.cli.common import console, handles_errors, summary_table
from ratesense.financial.calculators.credit_card import PaymentPolicy, run_credit_card
from ratesense.financial.export import fmt_pct, fmt_usd
from ratesense.financial.validation import validate_card_inputs


@click.command()
@click.option("--balance", type=float, required=True, help="Current card balance.")
@click.option("--apr", type=float, required=True, help="Card APR in percent.")
@click.option(
    "--mode",
    type=click.Choice([p.value for p in PaymentPolicy]),
    default=PaymentPolicy.MINIMUM.value,
    show_default=True,
    help="Pay the issuer minimum or a fixed amount.",
)
@click.option("--payment", type=float, default=None, help="Monthly payment for --mode fixed.")
@handles_errors
def card(balance: float, apr: float, mode: str, payment: float | None) -> None:
    """Simulate paying off a credit card."""
    policy = validate_card_inputs(balance, apr, mode, payment)
    outcome = run_credit_card(balance, apr, policy, payment)

    if outcome.paid_off:
        payoff = f"{outcome.months_to_payoff} months"
    else:
        payoff = f"Not paid off after {outcome.months_to_payoff} months ({fmt_usd(outcome.final_balance)} left)"

    rows = [
        ("Payoff time", payoff),
        ("Total interest", fmt_usd(outcome.total_interest)),
        ("Total paid", fmt_usd(outcome.total_paid)),
    ]
    if outcome.rows:
        rows.insert(0, ("First payment", fmt_usd(outcome.rows[0].payment, 2)))
    console.print(summary_table(f"Card {fmt_usd(balance)} at {fmt_pct(apr)} ({policy.value} payments)", rows))

    if not outcome.paid_off:
        click.echo("Warning: this payment may never pay off the balance. Try a higher payment.")
