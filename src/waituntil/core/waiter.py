"""Adaptive wait loop.

Sleeping for the whole remaining duration at once goes badly wrong if the
system clock is adjusted while we sleep. Instead we sleep for at most half
of the remaining time (and never more than an hour), then re-read the
clock and recompute. Within the last minute we sleep for exactly the
remaining time, since clock changes over that short a span don't matter.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta

from .clock import local_now
from .types import Clock, Sleeper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaitPolicy:
    """Thresholds driving the sleep schedule."""

    granularity: timedelta = timedelta(seconds=1)
    exact_below: timedelta = timedelta(minutes=1)
    cap_above: timedelta = timedelta(hours=2)
    max_sleep: timedelta = timedelta(hours=1)


DEFAULT_POLICY = WaitPolicy()


def next_sleep(remaining: timedelta, policy: WaitPolicy = DEFAULT_POLICY) -> timedelta | None:
    """Pick how long to sleep given the time left.

    Returns:
        The sleep duration, or None if we are close enough to count as
        having arrived.
    """
    if remaining < policy.granularity:
        return None
    if remaining > policy.cap_above:
        return policy.max_sleep
    if remaining > policy.exact_below:
        return remaining / 2
    return remaining


class AdaptiveWaiter:
    """Block until a target time, tolerating clock shifts.

    Args:
        clock: Source of the current time.
        sleep: Blocking sleep taking seconds.
        policy: Sleep schedule thresholds.
    """

    def __init__(
        self,
        clock: Clock = local_now,
        sleep: Sleeper = time.sleep,
        policy: WaitPolicy = DEFAULT_POLICY,
    ) -> None:
        self.clock = clock
        self.sleep = sleep
        self.policy = policy
        self.sleeps = 0

    def wait_until(self, target: datetime) -> None:
        """Return once *target* is reached (to within the granularity)."""
        self.sleeps = 0
        while True:
            now = self.clock()
            if now >= target:
                logger.debug(f"Reached {target.isoformat()} at {now.isoformat()}")
                return

            remaining = target - now
            duration = next_sleep(remaining, self.policy)
            if duration is None:
                logger.debug(f"Within {self.policy.granularity} of target, done")
                return

            logger.debug(f"{remaining} remaining, sleeping {duration}")
            self.sleep(duration.total_seconds())
            self.sleeps += 1


def wait_until(
    target: datetime,
    clock: Clock = local_now,
    sleep: Sleeper = time.sleep,
    policy: WaitPolicy = DEFAULT_POLICY,
) -> None:
    """Convenience wrapper around :class:`AdaptiveWaiter`."""
    AdaptiveWaiter(clock=clock, sleep=sleep, policy=policy).wait_until(target)
