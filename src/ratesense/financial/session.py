"""Per-caller calculator state.

A ``CalculatorSession`` holds what a single user's calculator page would
remember between clicks (the last comparison, its baseline schedule and
the text summary) so exports and share links work off explicit state
rather than module globals. The calculators it calls keep no state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from ratesense.core.exceptions import FileIOError
from ratesense.financial.calculators.scenarios import (
    DEFAULT_RATE_DELTAS,
    HousingCosts,
    RateChangeComparison,
    ScenarioRow,
    compare_rate_change,
    rate_delta_table,
)
from ratesense.financial.export import encode_share_query, export_schedule_csv, format_summary
from ratesense.financial.models import Schedule
from ratesense.financial.validation import validate_loan_inputs


@dataclass
class CalculatorInputs:
    """Raw calculator fields as last submitted."""

    principal: float
    apr: float
    term_years: float
    extra: float = 0.0
    delta: float = 0.0
    loan_type: str = "mortgage"
    housing: HousingCosts | None = None

    @property
    def term_months(self) -> int:
        return round(self.term_years * 12)


@dataclass
class CalculatorSession:
    """State for one calling context.

    Attributes:
        rate_deltas: Deltas used for the scenario table.
        inputs: Inputs of the last successful calculation.
        comparison: Last baseline vs. scenario result.
        scenario_rows: Last rate delta table.
        summary: Last plain-text summary ("" before any calculation).
    """

    rate_deltas: tuple[float, ...] = DEFAULT_RATE_DELTAS
    inputs: CalculatorInputs | None = None
    comparison: RateChangeComparison | None = None
    scenario_rows: list[ScenarioRow] = field(default_factory=list)
    summary: str = ""

    @property
    def last_schedule(self) -> Schedule | None:
        return self.comparison.baseline if self.comparison else None

    def calculate(
        self,
        principal: float,
        apr: float,
        term_years: float,
        extra: float = 0.0,
        delta: float = 0.0,
        loan_type: str = "mortgage",
        housing: HousingCosts | None = None,
    ) -> RateChangeComparison:
        """Validate inputs, run baseline and scenario, and remember the result.

        Housing costs only apply to mortgages.

        Raises:
            InvalidInputError: If the inputs are rejected. Earlier results
                are kept untouched in that case.
        """
        inputs = CalculatorInputs(
            principal=principal,
            apr=apr,
            term_years=term_years,
            extra=extra,
            delta=delta,
            loan_type=loan_type,
            housing=housing if loan_type == "mortgage" else None,
        )
        validate_loan_inputs(principal, apr, inputs.term_months, extra)
        validate_loan_inputs(principal, apr + delta, inputs.term_months, extra)

        comparison = compare_rate_change(
            principal, apr, delta, inputs.term_months, extra_monthly=extra, housing=inputs.housing
        )
        self.inputs = inputs
        self.comparison = comparison
        self.scenario_rows = rate_delta_table(principal, apr, inputs.term_months, extra, self.rate_deltas)
        self.summary = format_summary(
            principal, term_years, apr, comparison.new_apr, comparison.baseline, comparison.scenario
        )
        logger.debug(f"Session calculated {loan_type} ${principal:,.0f} at {apr}% (+{delta})")
        return comparison

    def export_csv(self, path: str) -> str:
        """Write the last baseline schedule to ``path``.

        Raises:
            FileIOError: If nothing has been calculated yet.
        """
        if self.last_schedule is None:
            raise FileIOError("Nothing to export yet; run a calculation first.")
        return export_schedule_csv(self.last_schedule, path)

    def share_query(self) -> str:
        """Share-link query for the last inputs ("" before any calculation)."""
        if self.inputs is None:
            return ""
        return encode_share_query(
            self.inputs.principal,
            self.inputs.apr,
            self.inputs.term_years,
            delta=self.inputs.delta,
            extra=self.inputs.extra or None,
        )

    def reset(self) -> None:
        self.inputs = None
        self.comparison = None
        self.scenario_rows = []
        self.summary = ""
