"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest


class FakeClock:
    """Controllable clock that doubles as the sleep primitive.

    Sleeping advances the clock by exactly the slept amount. ``jumps`` maps
    a sleep count to a clock adjustment applied right after that sleep.
    """

    def __init__(self, now: datetime, jumps: dict[int, timedelta] | None = None):
        self.now = now
        self.jumps = jumps or {}
        self.slept: list[float] = []

    def __call__(self) -> datetime:
        return self.now

    def sleep(self, seconds: float) -> None:
        assert seconds > 0
        self.slept.append(seconds)
        self.now += timedelta(seconds=seconds)
        self.now += self.jumps.get(len(self.slept), timedelta(0))


@pytest.fixture
def fixed_clock():
    """Factory for clocks frozen at the given UTC wall-clock fields."""

    def make(*args: int):
        now = datetime(*args, tzinfo=timezone.utc)
        return lambda: now

    return make


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_clock():
    """Fake clock starting at 2024-06-15 12:00:00 UTC."""
    return FakeClock(datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """Isolate config discovery from the real environment."""
    monkeypatch.delenv("WAITUNTIL_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(temp_dir / "home"))
    old_cwd = os.getcwd()
    os.chdir(temp_dir)
    yield temp_dir
    os.chdir(old_cwd)


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample configuration file."""
    config_content = '''
[wait]
granularity = 2
exact_below = 30
cap_above = 3600
max_sleep = 1800

[output]
verbose = true
time_format = "%H:%M"
'''
    config_file = temp_dir / "waituntil.toml"
    config_file.write_text(config_content)
    return config_file
