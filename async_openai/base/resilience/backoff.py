"""Exponential backoff policy and per-call schedule.

``BackoffPolicy`` is an immutable value shared by every call made through a
client. Each retried call asks it for a fresh :class:`ExponentialBackoff`
schedule, which tracks the current interval and the elapsed time for that
call only.

Schedule:
    interval_0 = initial_interval
    interval_n = min(interval_{n-1} * multiplier, max_interval)
    delay_n    = interval_n randomized by +/- randomization_factor
    stop once elapsed time (plus the next delay) exceeds max_elapsed_time
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from ..errors import ConfigError

DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_RANDOMIZATION_FACTOR = 0.5
DEFAULT_MULTIPLIER = 1.5
DEFAULT_MAX_INTERVAL = 60.0
DEFAULT_MAX_ELAPSED_TIME = 15 * 60.0


@dataclass(frozen=True)
class BackoffPolicy:
    """Retry delay schedule for rate-limited requests (seconds).

    Attributes:
        initial_interval: First delay before jitter.
        randomization_factor: Jitter ratio in ``[0, 1]``; 0 disables jitter.
        multiplier: Growth factor applied after each attempt; must exceed 1.
        max_interval: Cap on a single (pre-jitter) interval.
        max_elapsed_time: Total budget for one logical call; ``None`` retries
            without a time bound.
    """

    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    randomization_factor: float = DEFAULT_RANDOMIZATION_FACTOR
    multiplier: float = DEFAULT_MULTIPLIER
    max_interval: float = DEFAULT_MAX_INTERVAL
    max_elapsed_time: Optional[float] = DEFAULT_MAX_ELAPSED_TIME

    def __post_init__(self) -> None:
        for name in ("initial_interval", "max_interval", "randomization_factor"):
            if getattr(self, name) < 0:
                raise ConfigError(f"backoff {name} must be non-negative")
        if self.max_elapsed_time is not None and self.max_elapsed_time < 0:
            raise ConfigError("backoff max_elapsed_time must be non-negative")
        if self.randomization_factor > 1:
            raise ConfigError("backoff randomization_factor must be within [0, 1]")
        if self.multiplier <= 1:
            raise ConfigError("backoff multiplier must be greater than 1")

    def delays(self) -> Iterator[float]:
        """Yield the nominal (jitter-free, unbounded) interval sequence."""
        interval = self.initial_interval
        while True:
            yield interval
            interval = min(interval * self.multiplier, self.max_interval)

    def start(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
    ) -> "ExponentialBackoff":
        """Begin a new schedule for one logical call."""
        return ExponentialBackoff(self, clock=clock, rng=rng)


class ExponentialBackoff:
    """Mutable schedule for a single call; not shared between calls."""

    def __init__(
        self,
        policy: BackoffPolicy,
        *,
        clock: Callable[[], float],
        rng: Callable[[], float],
    ) -> None:
        self._policy = policy
        self._clock = clock
        self._rng = rng
        self._started = clock()
        self._current = policy.initial_interval

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started

    def _randomized(self, interval: float) -> float:
        delta = self._policy.randomization_factor * interval
        low = interval - delta
        high = interval + delta
        return low + self._rng() * (high - low)

    def next_delay(self) -> Optional[float]:
        """Return the next wait, or ``None`` once the time budget is spent."""
        budget = self._policy.max_elapsed_time
        elapsed = self.elapsed
        if budget is not None and elapsed > budget:
            return None
        delay = self._randomized(self._current)
        self._current = min(self._current * self._policy.multiplier, self._policy.max_interval)
        if budget is not None and elapsed + delay > budget:
            return None
        return delay


DEFAULT_BACKOFF_POLICY = BackoffPolicy()


__all__ = [
    "BackoffPolicy",
    "ExponentialBackoff",
    "DEFAULT_BACKOFF_POLICY",
]
