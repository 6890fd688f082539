"""Retry with exponential backoff."""

import time
from typing import Callable, TypeVar

T = TypeVar("T")


def retry_with_backoff(fn: Callable[[], T], max_retries: int = 3, initial_delay: float = 1.0) -> T:
    """Call ``fn`` up to ``max_retries`` times, sleeping ``initial_delay * 2**i`` between attempts.

    The last exception is re-raised once every attempt has failed.
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    for attempt in range(max_retries):
        try:
            return fn()
        except Exception:
            if attempt == max_retries - 1:
                raise
            time.sleep(initial_delay * 2**attempt)
