"""Month-by-month amortization for fixed and variable-rate loans.

Pure math over already-validated numbers. The payment is the closed-form
annuity payment for the current rate and remaining term; on a variable
curve it is re-amortized over the outstanding balance whenever the rate
changes, so the term holds and the payment moves.
"""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from ratesense.financial.calculators.rate_curve import RateCurve, flat_curve
from ratesense.financial.models import MAX_LOAN_MONTHS, ZERO_BALANCE_EPSILON, Schedule, ScheduleRow


def monthly_payment(principal: float, apr_percent: float, term_months: int) -> float:
    """Calculate the level monthly payment that amortizes a loan.

    Args:
        principal: Loan amount
        apr_percent: Annual rate in percent (e.g., 6.5 for 6.5%)
        term_months: Number of monthly payments

    Returns:
        Monthly payment amount. A zero rate gives exactly principal / term.
    """
    n = max(1, term_months)
    r = apr_percent / 100 / 12
    if r == 0:
        return principal / n
    return principal * r / (1 - (1 + r) ** -n)


def payment_for_remaining_months(balance: float, apr_percent: float, remaining_months: int) -> float:
    """Re-amortize an outstanding balance over what is left of the term."""
    return monthly_payment(balance, apr_percent, max(1, remaining_months))


def run_amortization(
    principal: float,
    rate_curve: RateCurve | float,
    term_months: int,
    extra_monthly: float = 0.0,
    max_months: int | None = None,
) -> Schedule:
    """Simulate a loan until it is paid off or the month ceiling is hit.

    Args:
        principal: Starting balance.
        rate_curve: APR path, or a plain APR for a fixed-rate loan.
        term_months: Original amortization term.
        extra_monthly: Extra principal paid on top of every scheduled payment.
        max_months: Stop after this many months (never beyond 1200).

    Returns:
        Schedule of every simulated month. When the scheduled payment cannot
        outpace interest the run stops on the ceiling with a balance left.
    """
    curve = rate_curve if isinstance(rate_curve, RateCurve) else flat_curve(rate_curve)
    ceiling = MAX_LOAN_MONTHS if max_months is None else max(0, min(max_months, MAX_LOAN_MONTHS))

    balance = float(principal)
    rows: list[ScheduleRow] = []
    scheduled = 0.0
    first_scheduled = 0.0
    payment_apr: float | None = None
    month = 0

    while balance > ZERO_BALANCE_EPSILON and month < ceiling:
        month += 1
        apr = curve.rate_at(month)

        if apr != payment_apr:
            scheduled = payment_for_remaining_months(balance, apr, term_months - (month - 1))
            if payment_apr is None:
                first_scheduled = scheduled
            payment_apr = apr

        interest = 0.0 if apr == 0 else balance * (apr / 100 / 12)
        payment = min(scheduled + extra_monthly, balance + interest)
        principal_portion = payment - interest
        balance = max(0.0, balance - principal_portion)

        rows.append(
            ScheduleRow(
                month=month,
                apr_percent=apr,
                payment=payment,
                interest_portion=interest,
                principal_portion=principal_portion,
                ending_balance=balance,
            )
        )

    if rows and 0 < balance <= ZERO_BALANCE_EPSILON:
        # Rounding dust on a paid-off loan
        rows[-1] = replace(rows[-1], ending_balance=0.0)
        balance = 0.0

    if balance > ZERO_BALANCE_EPSILON and ceiling == MAX_LOAN_MONTHS:
        logger.warning(f"Loan not paid off after {MAX_LOAN_MONTHS} months; balance ${balance:,.2f} remains")
    else:
        logger.debug(f"Amortized ${principal:,.2f} over {month} months")

    return Schedule(rows=tuple(rows), principal=float(principal), scheduled_payment=first_scheduled)
