"""Target time parsing.

Two families of time specification are accepted:

* **Clock time** – ``HH:MM`` or ``HH:MM:SS`` in 24 hour time. A clock time
  that has already passed today means that time tomorrow.
* **Calendar date** – ``YYYY-MM-DD HH:MM[:SS]``. The year, or the year and
  the month, may be left off to mean the current ones, and the time of day
  may be left off to mean midnight. A calendar date in the past is returned
  as is.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from enum import IntEnum

from .clock import local_now
from .exceptions import MissingArgumentError, UnparseableTimeError
from .types import Clock

logger = logging.getLogger(__name__)

_CLOCK_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{1,2})(?::([0-9]{1,2}))?$")

# Strict field widths for calendar layouts
_DIRECTIVES: dict[str, str] = {
    "Y": r"(?P<year>[0-9]{4})",
    "m": r"(?P<month>[0-9]{2})",
    "d": r"(?P<day>[0-9]{2})",
    "H": r"(?P<hour>[0-9]{1,2})",
    "M": r"(?P<minute>[0-9]{2})",
    "S": r"(?P<second>[0-9]{2})",
}


class FieldCompleteness(IntEnum):
    """How much of a calendar date a layout supplies.

    Later members imply everything before them is missing too.
    """

    FULL = 0
    MISSING_YEAR = 1
    MISSING_YEAR_AND_MONTH = 2


def _compile_layout(layout: str) -> re.Pattern[str]:
    """Turn a strftime-style layout into an anchored regular expression."""
    parts = []
    i = 0
    while i < len(layout):
        if layout[i] == "%" and i + 1 < len(layout):
            directive = layout[i + 1]
            if directive not in _DIRECTIVES:
                raise ValueError(f"Unsupported directive %{directive} in {layout!r}")
            parts.append(_DIRECTIVES[directive])
            i += 2
        else:
            parts.append(re.escape(layout[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


@dataclass(frozen=True)
class CandidatePattern:
    """A calendar layout paired with the fields it leaves out."""

    layout: str
    completeness: FieldCompleteness
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", _compile_layout(self.layout))

    def match(self, text: str) -> dict[str, int] | None:
        """Return the matched fields as integers, or None."""
        m = self.regex.match(text)
        if m is None:
            return None
        return {name: int(value) for name, value in m.groupdict().items()}


# Tried top to bottom; the first structural match wins.
PATTERNS: tuple[CandidatePattern, ...] = (
    CandidatePattern("%Y-%m-%d %H:%M", FieldCompleteness.FULL),
    CandidatePattern("%Y-%m-%d %H:%M:%S", FieldCompleteness.FULL),
    CandidatePattern("%Y-%m-%d", FieldCompleteness.FULL),
    CandidatePattern("%m-%d %H:%M", FieldCompleteness.MISSING_YEAR),
    CandidatePattern("%m-%d %H:%M:%S", FieldCompleteness.MISSING_YEAR),
    CandidatePattern("%m-%d", FieldCompleteness.MISSING_YEAR),
    CandidatePattern("%d %H:%M", FieldCompleteness.MISSING_YEAR_AND_MONTH),
    CandidatePattern("%d %H:%M:%S", FieldCompleteness.MISSING_YEAR_AND_MONTH),
    CandidatePattern("%d", FieldCompleteness.MISSING_YEAR_AND_MONTH),
)


def _current(clock: Clock, tz: tzinfo | None) -> datetime:
    now = clock()
    return now.astimezone(tz) if tz is not None else now.astimezone()


def _localize(naive: datetime, tz: tzinfo | None) -> datetime:
    """Attach *tz* to a wall-clock value, or the local zone if None."""
    if tz is not None:
        return naive.replace(tzinfo=tz)
    return naive.astimezone()


def parse_clock_time(
    text: str,
    clock: Clock = local_now,
    tz: tzinfo | None = None,
) -> datetime | None:
    """Parse ``HH:MM[:SS]`` into the next matching instant.

    A time earlier than now is pushed to tomorrow by adding 24 hours.
    The exception is a time within the current minute whose seconds have
    already been reached: ``17:01`` typed at 17:01:33 means right now, not
    tomorrow.

    Returns:
        The target instant, or None if *text* is not a clock time.
    """
    match = _CLOCK_TIME_RE.match(text)
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) is not None else 0
    if hour > 23 or minute > 59 or second > 59:
        return None

    now = _current(clock, tz)
    target = _localize(
        datetime(now.year, now.month, now.day, hour, minute, second), tz
    )

    if now.hour == hour and now.minute == minute and now.second >= second:
        return target

    if target < now:
        target += timedelta(hours=24)
    return target


# Leap year standing in for a missing year, so 02-29 always validates
_PLACEHOLDER_YEAR = 2000


def parse_calendar_date(
    text: str,
    clock: Clock = local_now,
    tz: tzinfo | None = None,
) -> datetime | None:
    """Parse a (possibly partial) calendar date against :data:`PATTERNS`.

    The matched fields are first validated against a placeholder date: a
    leap year when the year is missing, and January as well when the month
    is missing. Missing years and months are then taken from the current
    date. A day that overflows the resulting month rolls into the next one,
    so ``31`` in June is July 1st and ``02-29`` in 2023 is March 1st. There
    is no rolling forward into the next year or month otherwise.

    Returns:
        The target instant, or None if no layout matches.

    Raises:
        UnparseableTimeError: If a layout matches but names an impossible
            date or time.
    """
    for pattern in PATTERNS:
        fields = pattern.match(text)
        if fields is None:
            continue

        logger.debug(f"{text!r} matched layout {pattern.layout!r}")
        missing_year = pattern.completeness >= FieldCompleteness.MISSING_YEAR
        missing_month = pattern.completeness >= FieldCompleteness.MISSING_YEAR_AND_MONTH
        time_of_day = (
            fields.get("hour", 0),
            fields.get("minute", 0),
            fields.get("second", 0),
        )
        try:
            datetime(
                _PLACEHOLDER_YEAR if missing_year else fields["year"],
                1 if missing_month else fields["month"],
                fields["day"],
                *time_of_day,
            )
        except ValueError as e:
            raise UnparseableTimeError(text) from e

        now = _current(clock, tz)
        year = now.year if missing_year else fields["year"]
        month = now.month if missing_month else fields["month"]
        naive = datetime(year, month, 1, *time_of_day) + timedelta(days=fields["day"] - 1)
        return _localize(naive, tz)

    return None


def parse_time_spec(
    text: str,
    clock: Clock = local_now,
    tz: tzinfo | None = None,
) -> datetime:
    """Parse a target time specification into an aware datetime.

    The clock-time form is tried first, then the calendar forms.

    Args:
        text: Time specification, e.g. ``"17:30"`` or ``"12-25 08:00"``.
        clock: Source of the current time.
        tz: Zone to interpret the text in; None means the local zone.

    Raises:
        UnparseableTimeError: If *text* is not in any accepted form.
    """
    text = text.strip()

    target = parse_clock_time(text, clock, tz)
    if target is not None:
        logger.debug(f"{text!r} parsed as clock time {target.isoformat()}")
        return target

    target = parse_calendar_date(text, clock, tz)
    if target is not None:
        logger.debug(f"{text!r} parsed as calendar date {target.isoformat()}")
        return target

    raise UnparseableTimeError(text)


def parse_arguments(
    words: Sequence[str],
    clock: Clock = local_now,
    tz: tzinfo | None = None,
) -> datetime:
    """Join command-line words with single spaces and parse the result.

    Raises:
        MissingArgumentError: If *words* is empty.
        UnparseableTimeError: If the joined text cannot be parsed.
    """
    if not words:
        raise MissingArgumentError()
    return parse_time_spec(" ".join(words), clock, tz)
