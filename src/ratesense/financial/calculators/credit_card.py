"""Credit card payoff simulation.

Interest accrues on the starting balance each month, then the payment is
applied. Two payment policies:

- Minimum: 2% of the balance or $25, whichever is larger, and always at
  least $1 more than the month's interest.
- Fixed: the same amount every month.

Either way the payment never exceeds balance + interest.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

from loguru import logger

from ratesense.financial.models import MAX_CARD_MONTHS, ZERO_BALANCE_EPSILON, CreditCardOutcome, ScheduleRow

MIN_PAYMENT_RATE = 0.02
MIN_PAYMENT_FLOOR = 25.0
# Months allowed before a payment that cannot beat interest ends the run.
STALL_GRACE_MONTHS = 3


class PaymentPolicy(Enum):
    """How the monthly card payment is chosen."""

    MINIMUM = "minimum"
    FIXED = "fixed"


def minimum_payment(balance: float, interest: float) -> float:
    """Issuer-style minimum: max(2% of balance, $25), never below interest + $1."""
    return max(MIN_PAYMENT_RATE * balance, MIN_PAYMENT_FLOOR, interest + 1)


def run_credit_card(
    balance: float,
    apr: float,
    policy: PaymentPolicy | str = PaymentPolicy.MINIMUM,
    fixed_payment: float | None = None,
) -> CreditCardOutcome:
    """Simulate paying down a revolving balance.

    Args:
        balance: Starting card balance.
        apr: Annual rate in percent.
        policy: Minimum-payment or fixed-payment policy.
        fixed_payment: Monthly amount for the fixed policy.

    Returns:
        CreditCardOutcome. ``paid_off`` is False when the 600-month ceiling is
        reached, or when after month 3 the payment no longer makes progress
        against interest.
    """
    policy = PaymentPolicy(policy)
    monthly_rate = apr / 100 / 12
    fixed = fixed_payment or 0.0

    b = float(balance)
    total_interest = 0.0
    total_paid = 0.0
    rows: list[ScheduleRow] = []
    month = 0
    stalled = False

    while b > ZERO_BALANCE_EPSILON and month < MAX_CARD_MONTHS:
        interest = b * monthly_rate
        payment = minimum_payment(b, interest) if policy is PaymentPolicy.MINIMUM else fixed
        payment = min(payment, b + interest)

        if month + 1 > STALL_GRACE_MONTHS and payment <= interest + 0.01:
            stalled = True
            break

        month += 1
        b += interest - payment
        b = max(0.0, b)
        total_interest += interest
        total_paid += payment

        rows.append(
            ScheduleRow(
                month=month,
                apr_percent=apr,
                payment=payment,
                interest_portion=interest,
                principal_portion=payment - interest,
                ending_balance=b,
            )
        )

    if rows and 0 < b <= ZERO_BALANCE_EPSILON:
        rows[-1] = replace(rows[-1], ending_balance=0.0)
        b = 0.0

    paid_off = b <= ZERO_BALANCE_EPSILON
    if stalled:
        logger.warning(f"Card payment cannot outpace interest; stopped after {month} months at ${b:,.2f}")
    elif not paid_off:
        logger.warning(f"Card not paid off after {MAX_CARD_MONTHS} months; balance ${b:,.2f} remains")
    else:
        logger.debug(f"Card paid off in {month} months, ${total_interest:,.2f} interest")

    return CreditCardOutcome(
        months_to_payoff=month,
        total_interest=total_interest,
        total_paid=total_paid,
        paid_off=paid_off,
        final_balance=b,
        rows=tuple(rows),
    )
