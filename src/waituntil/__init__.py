"""waituntil: sleep until a given wall-clock time, surviving clock changes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("waituntil")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

from waituntil.core.clock import local_now
from waituntil.core.config import WaitUntilConfig, load_config
from waituntil.core.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    MissingArgumentError,
    TimeSpecError,
    UnparseableTimeError,
    WaitUntilError,
)
from waituntil.core.timespec import (
    PATTERNS,
    CandidatePattern,
    FieldCompleteness,
    parse_arguments,
    parse_time_spec,
)
from waituntil.core.waiter import AdaptiveWaiter, WaitPolicy, next_sleep, wait_until

__all__ = [
    # Version
    "__version__",
    # Parsing
    "parse_time_spec",
    "parse_arguments",
    "FieldCompleteness",
    "CandidatePattern",
    "PATTERNS",
    # Waiting
    "AdaptiveWaiter",
    "WaitPolicy",
    "next_sleep",
    "wait_until",
    "local_now",
    # Config
    "load_config",
    "WaitUntilConfig",
    # Exceptions
    "WaitUntilError",
    "TimeSpecError",
    "MissingArgumentError",
    "UnparseableTimeError",
    "ConfigError",
    "ConfigNotFoundError",
]
