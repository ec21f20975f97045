from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryStrategy:
    """Exponential backoff policy with optional jitter."""

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True
    exceptions: tuple[type[BaseException], ...] = (Exception,)
    retry_if: Callable[[Exception], bool] | None = None

    def should_retry(self, exception: Exception) -> bool:
        if self.retry_if is not None:
            return self.retry_if(exception)
        return isinstance(exception, self.exceptions)

    def calculate_delay(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt`` (zero based)."""
        delay = min(self.initial_delay * (self.exponential_base**attempt), self.max_delay)
        if self.jitter:
            delay *= random.uniform(0.5, 1.5)
        return delay
