"""Shared setup and rendering helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps

import click
from rich.console import Console
from rich.table import Table

from ratesense.core.exceptions import RateSenseError
from ratesense.financial.export import fmt_pct, fmt_usd
from ratesense.financial.models import Schedule

console = Console()


def init_context(ctx: click.Context, config_file: str | None, log_level: str | None) -> None:
    """Load config, set up logging, and stash the config on the click context."""
    from ratesense.core.config import Config
    from ratesense.core.utils.logging import setup_logging

    try:
        config = Config(config_file=config_file)
        settings = config.validated()
    except RateSenseError as e:
        raise click.ClickException(str(e)) from e

    log_file = settings.paths.log_path(settings.logging.file) if settings.logging.file else None
    setup_logging(level=log_level or settings.logging.level, log_file=log_file)
    ctx.obj = {"config": config, "settings": settings}


def get_settings(ctx: click.Context):
    """Validated settings for the current invocation."""
    return ctx.find_root().obj["settings"]


@contextmanager
def user_errors() -> Iterator[None]:
    """Turn library errors into a clean CLI message and exit code 1."""
    try:
        yield
    except RateSenseError as e:
        raise click.ClickException(str(e)) from e


def handles_errors(fn: Callable) -> Callable:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        with user_errors():
            return fn(*args, **kwargs)

    return wrapper


def summary_table(title: str, rows: list[tuple[str, str]]) -> Table:
    """Two-column label/value table."""
    table = Table(title=title, show_header=False, title_justify="left")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    return table


def schedule_table(schedule: Schedule, limit: int, title: str = "Schedule", show_apr: bool = False) -> Table:
    """First ``limit`` months of a schedule."""
    table = Table(title=f"{title} (first {min(limit, schedule.month_count)} of {schedule.month_count} months)")
    table.add_column("Month", justify="right")
    if show_apr:
        table.add_column("APR", justify="right")
    for name in ("Payment", "Interest", "Principal", "Balance"):
        table.add_column(name, justify="right")

    for row in schedule.rows[:limit]:
        cells = [str(row.month)]
        if show_apr:
            cells.append(fmt_pct(row.apr_percent))
        cells += [
            fmt_usd(row.payment, 2),
            fmt_usd(row.interest_portion, 2),
            fmt_usd(row.principal_portion, 2),
            fmt_usd(row.ending_balance, 2),
        ]
        table.add_row(*cells)
    return table


def payoff_note(schedule: Schedule) -> str:
    if schedule.paid_off:
        return f"{schedule.month_count} months"
    return f"{schedule.month_count} months (may not fully pay off: {fmt_usd(schedule.final_balance)} left)"
