"""Financial calculators: amortization, credit card, refinance, stress."""

from .amortization import monthly_payment, payment_for_remaining_months, run_amortization
from .credit_card import PaymentPolicy, run_credit_card
from .rate_curve import (
    ARMResetPolicy,
    ConstantIndex,
    FeedIndex,
    FlatPolicy,
    ManualIndex,
    RateCurve,
    StepShockPolicy,
    build_rate_curve,
    flat_curve,
)
from .refinance import refinance_breakeven
from .scenarios import (
    LOAN_PRESETS,
    HousingCosts,
    compare_loans,
    compare_rate_change,
    rate_delta_table,
)
from .stress import STEP_PRESETS, classify_risk, run_stress, step_preset

__all__ = [
    "LOAN_PRESETS",
    "STEP_PRESETS",
    "ARMResetPolicy",
    "ConstantIndex",
    "FeedIndex",
    "FlatPolicy",
    "HousingCosts",
    "ManualIndex",
    "PaymentPolicy",
    "RateCurve",
    "StepShockPolicy",
    "build_rate_curve",
    "classify_risk",
    "compare_loans",
    "compare_rate_change",
    "flat_curve",
    "monthly_payment",
    "payment_for_remaining_months",
    "rate_delta_table",
    "refinance_breakeven",
    "run_amortization",
    "run_credit_card",
    "run_stress",
    "step_preset",
]
