"""Logging setup for the command-line tool."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Library modules only create loggers; handlers are installed here, once,
    by the CLI.
    """
    logger = logging.getLogger("waituntil")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    return logger
