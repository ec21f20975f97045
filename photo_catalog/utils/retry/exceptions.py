"""Exception type raised once a retried call gives up."""

from __future__ import annotations


class RetryError(Exception):
    """Error raised after exhausting retry attempts."""

    def __init__(self, last_exception: Exception, attempts: int) -> None:
        self.last_exception = last_exception
        self.attempts = attempts
        super().__init__(f"Failed after {attempts} attempts. Last error: {last_exception}")
