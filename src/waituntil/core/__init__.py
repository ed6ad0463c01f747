"""Core parsing and waiting for waituntil."""

from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    MissingArgumentError,
    TimeSpecError,
    UnparseableTimeError,
    WaitUntilError,
)
from .timespec import PATTERNS, CandidatePattern, FieldCompleteness, parse_time_spec
from .waiter import AdaptiveWaiter, WaitPolicy

__all__ = [
    # Exceptions
    "ConfigError",
    "ConfigNotFoundError",
    "MissingArgumentError",
    "TimeSpecError",
    "UnparseableTimeError",
    "WaitUntilError",
    # Parsing
    "CandidatePattern",
    "FieldCompleteness",
    "PATTERNS",
    "parse_time_spec",
    # Waiting
    "AdaptiveWaiter",
    "WaitPolicy",
]
