"""RateSense CLI — entry point for the loan calculators."""

import click

from ratesense import __version__


@click.group()
@click.version_option(version=__version__, package_name="ratesense")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML or JSON config file.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR (overrides config).")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, log_level: str | None) -> None:
    """RateSense: loan payments, payoff and rate-shock calculators."""
    from .common import init_context

    init_context(ctx, config_file, log_level)


# Register subcommands (lazy imports keep startup fast)
from .calc_cmd import amortize, compare, presets
from .card_cmd import card
from .refi_cmd import refinance
from .stress_cmd import stress

main.add_command(amortize)
main.add_command(compare)
main.add_command(presets)
main.add_command(card)
main.add_command(refinance)
main.add_command(stress)
