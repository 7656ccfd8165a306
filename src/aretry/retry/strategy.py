r"""Delay strategy applied between attempts.

This module provides the DelayStrategy class that suspends the retry
loop before the next attempt.
"""

from __future__ import annotations

__all__ = ["DelayStrategy"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.retry.config import DelayCallback
    from aretry.status import RetryStatus

logger: logging.Logger = logging.getLogger(__name__)


class DelayStrategy:
    """Applies the configured delay before a retry.

    A number is a fixed duration in seconds, slept by the strategy itself.
    A callable owns the wait: it may sleep on its own and return ``None``,
    or return a number of seconds for the strategy to sleep.

    Args:
        delay: Fixed duration in seconds or (async) callable over the status.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.retry import DelayStrategy
        >>> from aretry.status import RetryStatus
        >>> asyncio.run(DelayStrategy(0.0).wait(RetryStatus()))
        0.0

        ```
    """

    def __init__(self, delay: float | DelayCallback) -> None:
        self.delay = delay

    async def wait(self, status: RetryStatus[Any]) -> float | None:
        """Wait before the next attempt.

        Args:
            status: The live retry status, with ``count`` already
                incremented for the upcoming retry.

        Returns:
            The number of seconds slept by the strategy, or ``None`` if a
            delay callable performed its own wait.
        """
        if callable(self.delay):
            seconds = self.delay(status)
            if inspect.isawaitable(seconds):
                seconds = await seconds
            if seconds is None:
                return None
        else:
            seconds = self.delay

        if seconds > 0:
            logger.debug(f"Waiting {seconds:.2f}s before retry {status.count}")
            await asyncio.sleep(seconds)
        return seconds
