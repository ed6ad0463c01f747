"""Main CLI entry point using rich-click."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import rich_click as click
from rich.console import Console

# Configure rich-click
click.rich_click.SHOW_ARGUMENTS = True

# Global consoles for Rich output
console = Console()
err_console = Console(stderr=True)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("when", nargs=-1)
@click.option("-v", "--verbose", is_flag=True, help="Report the target time before waiting")
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--debug", is_flag=True, help="Log every wait iteration to stderr")
@click.version_option(package_name="waituntil")
def waituntil(
    when: tuple[str, ...],
    verbose: bool,
    config_path: Path | None,
    debug: bool,
) -> None:
    """Wait until a given time.

    \b
    WHEN is a clock time or a calendar date:
        waituntil 17:30              today, or tomorrow if 17:30 has passed
        waituntil 17:30:15
        waituntil 2026-12-25 08:00
        waituntil 12-25              this year, at midnight
        waituntil 25 08:00           this month

    A calendar date that is already in the past returns immediately.
    """
    from waituntil.core.config import load_config
    from waituntil.core.exceptions import ConfigError, MissingArgumentError, UnparseableTimeError
    from waituntil.core.log import setup_logging
    from waituntil.core.timespec import parse_arguments
    from waituntil.core.waiter import AdaptiveWaiter

    setup_logging(debug, console=err_console)

    try:
        config = load_config(config_path)
        policy = config.wait_policy()
        time_format = config.time_format
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    try:
        target = parse_arguments(when)
    except MissingArgumentError as e:
        raise click.UsageError(str(e)) from e
    except UnparseableTimeError as e:
        raise click.BadParameter(str(e), param_hint="'WHEN...'") from e

    if verbose or config.verbose:
        console.print(f"until {_format_target(target, time_format)}", markup=False, highlight=False)

    AdaptiveWaiter(policy=policy).wait_until(target)


def _format_target(target: datetime, time_format: str) -> str:
    """Format in the local zone, so the offset is right across DST."""
    return target.astimezone().strftime(time_format)


def main() -> None:
    """Entry point for console script."""
    waituntil()


if __name__ == "__main__":
    main()
