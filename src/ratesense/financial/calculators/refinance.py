"""Refinance break-even analysis.

Runs the current loan and the refinance candidate side by side on flat
rates and answers two questions for a holding horizon:

- When do the monthly payment savings pay back the closing costs?
- Counting what is still owed at the end of the horizon, does the
  refinance come out ahead?
"""

from __future__ import annotations

from loguru import logger

from ratesense.financial.calculators.amortization import run_amortization
from ratesense.financial.models import RefinanceResult


def refinance_breakeven(
    principal: float,
    base_apr: float,
    new_apr: float,
    term_months: int,
    extra_monthly: float,
    closing_costs: float,
    keep_months: int,
) -> RefinanceResult:
    """Compare keeping the current loan against refinancing it.

    Args:
        principal: Balance being refinanced.
        base_apr: Current APR in percent.
        new_apr: Refinance APR in percent.
        term_months: Term used for both loans.
        extra_monthly: Extra principal paid on both loans.
        closing_costs: One-time cost of refinancing.
        keep_months: How long the borrower expects to keep the loan.

    Returns:
        RefinanceResult with ``breakeven_month=None`` when cumulative savings
        never cover the closing costs within the horizon.
    """
    baseline = run_amortization(principal, base_apr, term_months, extra_monthly)
    refinanced = run_amortization(principal, new_apr, term_months, extra_monthly)

    horizon = max(0, min(keep_months, max(baseline.month_count, refinanced.month_count)))

    breakeven_month = None
    cumulative = 0.0
    for month in range(1, horizon + 1):
        cumulative += baseline.payment_at(month) - refinanced.payment_at(month)
        if breakeven_month is None and cumulative >= closing_costs:
            breakeven_month = month

    baseline_cost = baseline.paid_through(horizon) + baseline.balance_at(horizon)
    refinance_cost = refinanced.paid_through(horizon) + refinanced.balance_at(horizon) + closing_costs
    net_savings = baseline_cost - refinance_cost

    logger.debug(
        f"Refinance {base_apr:.3f}% -> {new_apr:.3f}%: breakeven={breakeven_month}, "
        f"net ${net_savings:,.2f} over {horizon} months"
    )

    return RefinanceResult(
        breakeven_month=breakeven_month,
        net_savings=net_savings,
        horizon_months=horizon,
        monthly_savings=baseline.base_payment - refinanced.base_payment,
        baseline=baseline,
        refinanced=refinanced,
    )
