r"""Rate-limit-aware delay policy for bot API calls.

The delay honors the wait requested by a rate-limited response and falls
back to a capped exponential backoff for every other failure.
"""

from __future__ import annotations

__all__ = ["RateLimitAwareDelay", "is_rate_limit_error"]

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from aretry.backoff import ExponentialBackoff
from aretry.bot.exceptions import RATE_LIMIT_ERROR_CODE, BotApiError
from aretry.utils.retry_after import extract_retry_after
from aretry.utils.sleep import calculate_sleep_time
from aretry.utils.validation import validate_backoff_params

if TYPE_CHECKING:
    from aretry.backoff.base import BaseBackoffStrategy
    from aretry.status import RetryStatus

logger: logging.Logger = logging.getLogger(__name__)


def is_rate_limit_error(error: Any) -> bool:
    """Indicate if an error is a rate-limit response.

    Args:
        error: The error recorded for a failed attempt.

    Returns:
        ``True`` for a ``BotApiError`` or error payload with code 429, or
        an ``httpx.HTTPStatusError`` with status 429.

    Example:
        ```pycon
        >>> from aretry.bot import is_rate_limit_error
        >>> is_rate_limit_error({"ok": False, "error_code": 429, "description": "slow down"})
        True
        >>> is_rate_limit_error(TimeoutError())
        False

        ```
    """
    if isinstance(error, BotApiError):
        return error.is_rate_limited
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code == RATE_LIMIT_ERROR_CODE
    if isinstance(error, Mapping):
        return error.get("ok") is False and error.get("error_code") == RATE_LIMIT_ERROR_CODE
    return False


class RateLimitAwareDelay:
    """Delay callable for ``RetryOptions.delay``.

    When the last error is a rate-limit response, waits the number of
    seconds it requests (``default_retry_after`` when it requests none).
    Otherwise waits ``backoff_strategy.calculate(status.count)`` with
    optional jitter. Since the retry count is incremented before the delay
    runs, the first retry uses ``calculate(1)``.

    Args:
        backoff_strategy: Backoff used for errors without a hint. Defaults
            to ``ExponentialBackoff(base_delay=1.0, factor=2.0,
            max_delay=30.0)``.
        jitter_factor: Factor for adding random jitter to backoff delays.
        default_retry_after: Wait in seconds for a rate-limit response
            without hint.
        max_wait_time: Optional cap applied to every wait, hints included.

    Example:
        ```pycon
        >>> from aretry.bot import RateLimitAwareDelay
        >>> from aretry.status import ErrorRecord, RetryStatus, utc_now
        >>> delay = RateLimitAwareDelay()
        >>> status = RetryStatus(count=1)
        >>> status.errors.append(ErrorRecord(TimeoutError(), utc_now()))
        >>> delay.compute(status)
        2.0

        ```
    """

    def __init__(
        self,
        backoff_strategy: BaseBackoffStrategy | None = None,
        jitter_factor: float = 0.0,
        default_retry_after: float = 30.0,
        max_wait_time: float | None = None,
    ) -> None:
        validate_backoff_params(jitter_factor=jitter_factor, max_wait_time=max_wait_time)
        if default_retry_after < 0:
            msg = f"default_retry_after must be >= 0, got {default_retry_after}"
            raise ValueError(msg)
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy
            if backoff_strategy is not None
            else ExponentialBackoff(base_delay=1.0, factor=2.0, max_delay=30.0)
        )
        self.jitter_factor = jitter_factor
        self.default_retry_after = default_retry_after
        self.max_wait_time = max_wait_time

    def compute(self, status: RetryStatus[Any]) -> float:
        """Compute the wait before the next attempt.

        Args:
            status: The live retry status.

        Returns:
            The wait in seconds.
        """
        error = status.last_error
        if is_rate_limit_error(error):
            retry_after = extract_retry_after(error)
            if retry_after is None:
                retry_after = self.default_retry_after
            logger.debug(f"Rate limited, retrying after {retry_after:.2f}s (retry {status.count})")
            return calculate_sleep_time(
                attempt=status.count,
                retry_after=retry_after,
                max_wait_time=self.max_wait_time,
            )
        return calculate_sleep_time(
            attempt=status.count,
            jitter_factor=self.jitter_factor,
            backoff_strategy=self.backoff_strategy,
            max_wait_time=self.max_wait_time,
        )

    async def __call__(self, status: RetryStatus[Any]) -> None:
        await asyncio.sleep(self.compute(status))
