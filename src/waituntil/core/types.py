"""Type aliases for waituntil."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TypeAlias

# Path types
PathLike: TypeAlias = str | Path

# Returns the current time as an aware datetime
Clock: TypeAlias = Callable[[], datetime]

# Blocks for the given number of seconds
Sleeper: TypeAlias = Callable[[float], None]
