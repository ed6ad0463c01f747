"""Default clock for parsing and waiting."""

from datetime import datetime


def local_now() -> datetime:
    """Return the current wall-clock time as an aware local datetime."""
    return datetime.now().astimezone()
