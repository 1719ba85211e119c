"""Input checks that run before any calculator is invoked.

The engines assume valid numbers; these helpers turn bad user input into
an ``InvalidInputError`` carrying a message fit to show on screen.
"""

from __future__ import annotations

import math
import re

from ratesense.core.exceptions import InvalidInputError
from ratesense.financial.calculators.credit_card import PaymentPolicy


def _require_finite(name: str, value: float | None) -> float:
    if value is None or not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a number.")
    return float(value)


def validate_loan_inputs(
    principal: float | None,
    apr: float | None,
    term_months: int | None,
    extra_monthly: float | None = 0.0,
) -> None:
    """Reject loan inputs the amortization engine is not defined for.

    Raises:
        InvalidInputError: On non-positive principal or term, negative APR,
            or negative extra payment.
    """
    if _require_finite("Principal", principal) <= 0:
        raise InvalidInputError("Principal must be greater than 0.")
    if _require_finite("APR", apr) < 0:
        raise InvalidInputError("APR cannot be negative.")
    if _require_finite("Term", term_months) <= 0:
        raise InvalidInputError("Term must be greater than 0 months.")
    if extra_monthly is not None and _require_finite("Extra payment", extra_monthly) < 0:
        raise InvalidInputError("Extra payment cannot be negative.")


def validate_card_inputs(
    balance: float | None,
    apr: float | None,
    policy: PaymentPolicy | str,
    fixed_payment: float | None = None,
) -> PaymentPolicy:
    """Reject credit card inputs and normalise the payment policy.

    Returns:
        The parsed PaymentPolicy.

    Raises:
        InvalidInputError: On non-positive balance, negative APR, an unknown
            policy, or a fixed policy without a positive payment.
    """
    if _require_finite("Balance", balance) <= 0:
        raise InvalidInputError("Balance must be greater than 0.")
    if _require_finite("APR", apr) < 0:
        raise InvalidInputError("APR cannot be negative.")
    try:
        parsed = PaymentPolicy(policy)
    except ValueError:
        choices = ", ".join(p.value for p in PaymentPolicy)
        raise InvalidInputError(f"Unknown payment policy {policy!r}; choose from {choices}.") from None

    if parsed is PaymentPolicy.FIXED:
        if fixed_payment is None:
            raise InvalidInputError("A fixed payment amount is required for the fixed payment policy.")
        if _require_finite("Fixed payment", fixed_payment) <= 0:
            raise InvalidInputError("Fixed payment must be greater than 0.")
    return parsed


def validate_refinance_inputs(closing_costs: float | None, keep_months: int | None) -> None:
    """Reject refinance-only inputs (loan fields go through validate_loan_inputs)."""
    if _require_finite("Closing costs", closing_costs) < 0:
        raise InvalidInputError("Closing costs cannot be negative.")
    if _require_finite("Holding period", keep_months) <= 0:
        raise InvalidInputError("Holding period must be greater than 0 months.")


_SCHEDULE_SPLIT = re.compile(r"[,\s]+")


def parse_number(text: str | None) -> float | None:
    """Parse a user-typed number, returning None when it is not one."""
    if text is None:
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_manual_schedule(text: str | None) -> list[float]:
    """Split a typed index schedule ("4.5, 5.0 5.25") into numbers.

    Tokens that are not finite numbers are dropped.
    """
    if not text:
        return []
    values = (parse_number(token) for token in _SCHEDULE_SPLIT.split(text) if token)
    return [v for v in values if v is not None]
