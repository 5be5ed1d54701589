"""Bounded retry policy for deleting telemetry files.

A writer may still hold a telemetry file open while a sweep runs, so a
failed delete is retried a few times with a short pause. The pause goes
through an injectable ``wait`` coroutine that returns early when the sweep
is cancelled.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable


class BackoffStrategy(Enum):
    CONSTANT = "constant"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class RetryPolicy:
    """Delete retry configuration.

    Attributes:
        max_attempts: Total delete attempts per file, including the first one
        base_delay: Pause in seconds after the first failed attempt
        max_delay: Upper bound for any single pause
        strategy: How the pause grows between attempts
    """

    max_attempts: int = 3
    base_delay: float = 0.1
    max_delay: float = 1.0
    strategy: BackoffStrategy = BackoffStrategy.CONSTANT

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")

    def delay_for(self, attempt: int) -> float:
        """Return the pause that follows failed attempt number ``attempt`` (1-indexed)."""
        if attempt < 1:
            raise ValueError("attempt must be at least 1")

        if self.strategy == BackoffStrategy.LINEAR:
            delay = self.base_delay * attempt
        elif self.strategy == BackoffStrategy.EXPONENTIAL:
            delay = self.base_delay * (2 ** (attempt - 1))
        else:
            delay = self.base_delay

        return min(delay, self.max_delay)

    def delays(self) -> list[float]:
        return [self.delay_for(attempt) for attempt in range(1, self.max_attempts)]


WaitFunc = Callable[[threading.Event, float], Awaitable[bool]]


async def wait_for_cancel(cancel_event: threading.Event, delay: float) -> bool:
    """Sleep for ``delay`` seconds, returning True as soon as cancellation is requested."""
    if delay <= 0:
        return cancel_event.is_set()
    return bool(await asyncio.to_thread(cancel_event.wait, delay))
