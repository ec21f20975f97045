from __future__ import annotations

from photo_catalog.utils.retry.decorator import retry
from photo_catalog.utils.retry.exceptions import RetryError
from photo_catalog.utils.retry.strategies import RetryStrategy

__all__ = ["RetryError", "RetryStrategy", "retry"]
