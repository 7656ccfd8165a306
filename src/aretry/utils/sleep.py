r"""Sleep time calculation utilities.

This module provides the function that turns a retry count, a backoff
strategy, and an optional server hint into the wait before the next
attempt.
"""

from __future__ import annotations

__all__ = ["calculate_sleep_time"]

import logging
import random
from typing import TYPE_CHECKING

from aretry.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from aretry.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


def calculate_sleep_time(
    attempt: int,
    jitter_factor: float = 0.0,
    retry_after: float | None = None,
    backoff_strategy: BaseBackoffStrategy | None = None,
    max_wait_time: float | None = None,
) -> float:
    """Calculate sleep time for a retry with backoff strategy and jitter.

    The sleep time is calculated as follows:
    1. Determine base sleep time:
       - If a retry-after hint is present: use that value
       - Otherwise: use backoff_strategy.calculate(attempt)
    2. Apply max_wait_time cap (if max_wait_time is set)
    3. Apply jitter (if jitter_factor > 0):
       - jitter = random.uniform(0, jitter_factor) * sleep_time
       - total_sleep_time = sleep_time + jitter

    Args:
        attempt: The retry number (0-indexed).
        jitter_factor: Factor for adding random jitter. Set to 0 to
            disable jitter.
        retry_after: Optional server-communicated wait in seconds. Takes
            precedence over the backoff strategy.
        backoff_strategy: BaseBackoffStrategy instance or None.
            Defaults to ExponentialBackoff with base_delay=0.3.
        max_wait_time: Optional maximum delay cap in seconds, applied to
            retry-after hints too.

    Returns:
        The sleep time in seconds, including any jitter.

    Example:
        ```pycon
        >>> from aretry.utils import calculate_sleep_time
        >>> calculate_sleep_time(attempt=0)
        0.3
        >>> calculate_sleep_time(attempt=2)
        1.2
        >>> calculate_sleep_time(attempt=2, retry_after=5.0)
        5.0
        >>> calculate_sleep_time(attempt=2, max_wait_time=1.0)
        1.0

        ```
    """
    if retry_after is not None:
        sleep_time = retry_after
        logger.debug(f"Using retry-after hint: {sleep_time:.2f}s")
    else:
        if backoff_strategy is None:
            backoff_strategy = ExponentialBackoff()
        sleep_time = backoff_strategy.calculate(attempt)

    if max_wait_time is not None and sleep_time > max_wait_time:
        logger.debug(
            f"Capping sleep time from {sleep_time:.2f}s to {max_wait_time:.2f}s "
            f"(max_wait_time={max_wait_time:.2f}s)"
        )
        sleep_time = max_wait_time

    if jitter_factor > 0:
        jitter = random.uniform(0, jitter_factor) * sleep_time  # noqa: S311
        total_sleep_time = sleep_time + jitter
        logger.debug(
            f"Waiting {total_sleep_time:.2f}s before retry "
            f"(base={sleep_time:.2f}s, jitter={jitter:.2f}s)"
        )
    else:
        total_sleep_time = sleep_time
        logger.debug(f"Waiting {total_sleep_time:.2f}s before retry")

    return total_sleep_time
