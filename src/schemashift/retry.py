"""Bounded retry for opening database connections.

A connection attempt that fails with a retryable error is repeated after a
delay that starts at one second and doubles on each retry, never exceeding
two minutes. ``max_retries`` counts retries, so ``max_retries=0`` means a
single attempt.

Example:
    >>> from schemashift.retry import ExponentialBackoff
    >>> backoff = ExponentialBackoff(max_retries=10)
    >>> [backoff.next_delay(n) for n in (0, 1, 2, 7, 8)]
    [1.0, 2.0, 4.0, 120.0, 120.0]
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")

RetryCallback = Callable[[int, Exception, float], None]


class RetryStrategy(Protocol):
    def next_delay(self, attempt: int) -> float: ...

    def should_retry(self, failures: int, error: BaseException | None = None) -> bool: ...


@dataclass(frozen=True)
class ExponentialBackoff:
    """Doubling delay capped at ``max_delay``.

    Attributes:
        max_retries: Retries allowed after the first failed attempt
        base_delay: Delay before the first retry, in seconds
        max_delay: Upper bound for any single delay, in seconds
        multiplier: Growth factor between consecutive delays
        retryable_errors: Only these exception types are retried (None = any)
    """

    max_retries: int = 0
    base_delay: float = 1.0
    max_delay: float = 120.0
    multiplier: float = 2.0
    retryable_errors: tuple[type[BaseException], ...] | None = None

    def next_delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (zero-based)."""
        return min(self.base_delay * self.multiplier**attempt, self.max_delay)

    def should_retry(self, failures: int, error: BaseException | None = None) -> bool:
        if failures > self.max_retries:
            return False
        if error is None or self.retryable_errors is None:
            return True
        return isinstance(error, self.retryable_errors)


@dataclass
class RetryContext:
    """Runs a callable under a strategy and remembers how many attempts it took.

    ``on_retry`` is called with (attempt, error, delay) before each sleep.
    """

    strategy: RetryStrategy
    on_retry: RetryCallback | None = None
    attempt: int = field(default=0, init=False)
    last_error: Exception | None = field(default=None, init=False)

    def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        while True:
            self.attempt += 1
            try:
                return func(*args, **kwargs)
            except Exception as e:
                self.last_error = e
                if not self.strategy.should_retry(self.attempt, e):
                    raise
                self._pause(e)

    def _pause(self, error: Exception) -> None:
        delay = self.strategy.next_delay(self.attempt - 1)
        if self.on_retry is not None:
            self.on_retry(self.attempt, error, delay)
        time.sleep(delay)


__all__ = [
    "ExponentialBackoff",
    "RetryContext",
    "RetryStrategy",
]
