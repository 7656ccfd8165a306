r"""Run a fallible asynchronous operation with automatic retry logic.

This module provides the ``retry_async`` entry point, a thin wrapper
around ``AsyncRetryExecutor``.
"""

from __future__ import annotations

__all__ = ["retry_async"]

import dataclasses
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.retry import AsyncRetryExecutor, RetryOptions

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.retry.config import DelayCallback, Hook, RetriesPredicate

T = TypeVar("T")


async def retry_async(
    operation: Callable[..., T | Awaitable[T]],
    options: RetryOptions | None = None,
    *,
    retries: int | RetriesPredicate | None = None,
    delay: float | DelayCallback | None = None,
    on_retry: Hook | None = None,
    on_rejected: Hook | None = None,
    on_resolved: Hook | None = None,
) -> T:
    """Run an operation, retrying it until it succeeds, is rejected, or
    the retry budget is exhausted.

    The operation is called as
    ``operation(settle_success, settle_failure, status)``:

    - returning a value (or an awaitable resolving to one) resolves the
      attempt;
    - raising an exception fails the attempt, which is retried according
      to ``retries``;
    - calling ``settle_success(value)`` resolves the session immediately,
      whatever the operation returns or raises afterwards;
    - calling ``settle_failure(reason)`` rejects the session immediately,
      without any further retry.

    Keyword arguments override the matching fields of ``options``.

    Args:
        operation: The fallible operation.
        options: Optional retry policy. Defaults to ``RetryOptions()``,
            i.e. a single attempt without delay.
        retries: Maximum number of retries, or an (async) predicate over
            the retry status.
        delay: Seconds to wait between attempts, or an (async) callable
            over the retry status.
        on_retry: Optional hook ``(error, status)`` invoked before each retry.
        on_rejected: Optional hook ``(error, status)`` invoked once on
            final rejection.
        on_resolved: Optional hook ``(value, status)`` invoked once on
            success.

    Returns:
        The success value.

    Raises:
        Exception: The terminal rejection reason.
        TypeError: If ``retries`` or ``delay`` has an unsupported type.
        ValueError: If ``retries`` or ``delay`` is negative.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import retry_async
        >>> async def fetch(settle_success, settle_failure, status):
        ...     if status.count == 0:
        ...         raise TimeoutError("first attempt times out")
        ...     return {"ok": True}
        ...
        >>> asyncio.run(retry_async(fetch, retries=2, delay=0.01))
        {'ok': True}

        ```
    """
    overrides: dict[str, Any] = {
        name: value
        for name, value in (
            ("retries", retries),
            ("delay", delay),
            ("on_retry", on_retry),
            ("on_rejected", on_rejected),
            ("on_resolved", on_resolved),
        )
        if value is not None
    }
    options = dataclasses.replace(options or RetryOptions(), **overrides)
    return await AsyncRetryExecutor(options).execute(operation)
