"""Configuration loading and management."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from .exceptions import ConfigError, ConfigNotFoundError
from .types import PathLike
from .waiter import WaitPolicy

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z %Z"

# [wait] keys, in seconds
_WAIT_KEYS = ("granularity", "exact_below", "cap_above", "max_sleep")


@dataclass
class WaitUntilConfig:
    """Loaded configuration."""

    wait: dict[str, Any] = field(default_factory=dict)
    output: dict[str, Any] = field(default_factory=dict)

    _source_path: Path | None = field(default=None, repr=False)

    @property
    def source_path(self) -> Path | None:
        return self._source_path

    @property
    def verbose(self) -> bool:
        return bool(self.output.get("verbose", False))

    @property
    def time_format(self) -> str:
        fmt = self.output.get("time_format", DEFAULT_TIME_FORMAT)
        if not isinstance(fmt, str):
            raise ConfigError(f"output.time_format must be a string, got {fmt!r}")
        return fmt

    def wait_policy(self) -> WaitPolicy:
        """Build the wait policy, falling back to defaults for missing keys.

        Raises:
            ConfigError: If a value is not a positive number of seconds, or
                exact_below exceeds cap_above.
        """
        overrides: dict[str, timedelta] = {}
        for key in _WAIT_KEYS:
            if key not in self.wait:
                continue
            value = self.wait[key]
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"wait.{key} must be a positive number of seconds, got {value!r}")
            overrides[key] = timedelta(seconds=value)

        policy = WaitPolicy(**overrides)
        if policy.exact_below > policy.cap_above:
            raise ConfigError("wait.exact_below must not exceed wait.cap_above")
        return policy


def find_config_file() -> Path | None:
    """Find configuration file in priority order.

    Search order:
    1. WAITUNTIL_CONFIG environment variable
    2. ./waituntil.toml (current directory)
    3. ./pyproject.toml [tool.waituntil] section
    4. Git repository root waituntil.toml
    5. ~/.config/waituntil/config.toml
    """
    if env_path := os.environ.get("WAITUNTIL_CONFIG"):
        return Path(env_path)

    cwd = Path.cwd()
    if (cwd / "waituntil.toml").exists():
        return cwd / "waituntil.toml"

    if (cwd / "pyproject.toml").exists():
        try:
            with open(cwd / "pyproject.toml", "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError:
            pyproject = {}
        if "waituntil" in pyproject.get("tool", {}):
            return cwd / "pyproject.toml"

    # Git root
    git_root = _find_git_root(cwd)
    if git_root and (git_root / "waituntil.toml").exists():
        return git_root / "waituntil.toml"

    # User config
    user_config = Path.home() / ".config" / "waituntil" / "config.toml"
    if user_config.exists():
        return user_config

    return None


def _find_git_root(start: Path) -> Path | None:
    """Find git repository root."""
    current = start.resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return None


def load_config(path: PathLike | None = None) -> WaitUntilConfig:
    """Load configuration from file.

    Args:
        path: Explicit config path or None to auto-discover

    Raises:
        ConfigNotFoundError: If the config path does not exist.
        ConfigError: If the file is not valid TOML, or a section is not a
            table.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        return WaitUntilConfig()  # Empty config, use defaults

    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    # Handle pyproject.toml
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("waituntil", {})
        if not isinstance(data, dict):
            raise ConfigError(f"[tool.waituntil] must be a table in {path}")

    for section in ("wait", "output"):
        if not isinstance(data.get(section, {}), dict):
            raise ConfigError(f"[{section}] must be a table in {path}")

    config = WaitUntilConfig(
        wait=data.get("wait", {}),
        output=data.get("output", {}),
    )
    config._source_path = path

    return config
