"""Loan simulation: calculators, models, validation and exports."""

from .models import (
    CreditCardOutcome,
    LoanSpec,
    RatePoint,
    RefinanceResult,
    RiskLabel,
    Schedule,
    ScheduleRow,
    StressOutcome,
)

__all__ = [
    "CreditCardOutcome",
    "LoanSpec",
    "RatePoint",
    "RefinanceResult",
    "RiskLabel",
    "Schedule",
    "ScheduleRow",
    "StressOutcome",
]
