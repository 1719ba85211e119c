"""Projections of calculator results: CSV, share links, text summary.

Everything here is formatting only; numbers come straight from the
calculators and are rounded for display at this layer and nowhere else.
"""

from __future__ import annotations

import csv
import io
import math
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from loguru import logger

from ratesense.core.utils.file_io import safe_write_with_backup
from ratesense.financial.models import Schedule

CSV_HEADER = ("Month", "Payment", "Interest", "Principal", "Balance")

# Query keys used by share links
SHARE_KEYS = {
    "p": "principal",
    "apr": "apr",
    "term": "term_years",
    "delta": "delta",
    "extra": "extra",
}


def fmt_usd(value: float | None, decimals: int = 0) -> str:
    """Format dollars as $1,234 (or $1,234.56 with decimals=2)."""
    if value is None or not math.isfinite(value):
        return "—"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def fmt_pct(value: float | None, decimals: int = 2) -> str:
    """Format a percent figure (6.5 -> '6.50%')."""
    if value is None or not math.isfinite(value):
        return "—"
    return f"{value:.{decimals}f}%"


def schedule_to_csv(schedule: Schedule) -> str:
    """Render a schedule as CSV with a trailing totals row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in schedule.rows:
        writer.writerow(
            [
                row.month,
                f"{row.payment:.2f}",
                f"{row.interest_portion:.2f}",
                f"{row.principal_portion:.2f}",
                f"{row.ending_balance:.2f}",
            ]
        )
    writer.writerow(
        [
            "Total",
            f"{schedule.total_paid:.2f}",
            f"{schedule.total_interest:.2f}",
            f"{schedule.total_principal:.2f}",
            "",
        ]
    )
    return buf.getvalue()


def export_schedule_csv(schedule: Schedule, path: str) -> str:
    """Write ``schedule`` as CSV to ``path`` and return the path.

    An existing file at ``path`` is first copied to a timestamped backup.
    """
    backup = safe_write_with_backup(path, schedule_to_csv(schedule))
    if backup:
        logger.info(f"Previous export kept as {backup}")
    logger.info(f"Exported {schedule.month_count}-month schedule to {path}")
    return path


def _compact(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def encode_share_query(
    principal: float,
    apr: float,
    term_years: float,
    delta: float | None = None,
    extra: float | None = None,
) -> str:
    """Encode calculator inputs as a ``p=..&apr=..&term=..`` query string."""
    params = {"p": principal, "apr": apr, "term": term_years, "delta": delta, "extra": extra}
    return urlencode({k: _compact(v) for k, v in params.items() if v is not None})


def build_share_url(base_url: str, **inputs: float | None) -> str:
    """Replace the query of ``base_url`` with encoded calculator inputs."""
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, encode_share_query(**inputs), ""))


def decode_share_query(query: str) -> dict[str, float]:
    """Parse a share query back into calculator inputs.

    Accepts a bare query or a full URL. Unknown keys and values that are
    not finite numbers are dropped.
    """
    if "?" in query:
        query = urlsplit(query).query
    decoded: dict[str, float] = {}
    for key, raw in parse_qsl(query.lstrip("?")):
        name = SHARE_KEYS.get(key)
        if name is None:
            continue
        try:
            value = float(raw)
        except ValueError:
            continue
        if math.isfinite(value):
            decoded[name] = value
    return decoded


def format_summary(
    principal: float,
    term_years: float,
    apr: float,
    new_apr: float,
    baseline: Schedule,
    scenario: Schedule,
) -> str:
    """Plain-text summary of a baseline vs. scenario rate comparison."""
    lines = [
        "RateSense Summary",
        f"Loan balance: {fmt_usd(principal)}",
        f"Loan length: {term_years:g} years",
        f"Baseline APR: {fmt_pct(apr)}",
        f"Scenario APR: {fmt_pct(new_apr)}",
        "",
        f"Baseline payment: {fmt_usd(baseline.scheduled_payment)}",
        f"Scenario payment: {fmt_usd(scenario.scheduled_payment)}",
        "",
        f"Baseline interest: {fmt_usd(baseline.total_interest)}",
        f"Scenario interest: {fmt_usd(scenario.total_interest)}",
        "",
        "Educational use only.",
    ]
    return "\n".join(lines)
