r"""aretry - Asynchronous retry orchestrator.

This package re-invokes a fallible asynchronous operation according to a
configurable policy (retry budget, inter-attempt delay, rate-limit-aware
backoff) until it succeeds, is explicitly rejected, or exhausts its retry
budget.

Key Features:
    - Fixed retry budget or (async) predicate over the retry status
    - Fixed delay or (async) delay callable, e.g. honoring server hints
    - Side-channel settlement: an operation can force success or terminal
      failure from response content, whatever it returns or raises
    - Live retry status with full error history for policy callbacks
    - Isolated notification hooks: on_retry, on_rejected, on_resolved
    - Exponential, linear, and constant backoff strategies with jitter
    - Sample bot API client with rate-limit handling

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import retry_async
    >>> attempts = []
    >>> async def operation(settle_success, settle_failure, status):
    ...     attempts.append(status.count)
    ...     if status.count < 1:
    ...         raise ConnectionError("transient")
    ...     return 42
    ...
    >>> asyncio.run(retry_async(operation, retries=3))
    42
    >>> attempts
    [0, 1]

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "ErrorRecord",
    "RejectedError",
    "RetryOptions",
    "RetryStatus",
    "SessionState",
    "__version__",
    "retry_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.exceptions import RejectedError
from aretry.retry import AsyncRetryExecutor, RetryOptions
from aretry.retry_async import retry_async
from aretry.status import ErrorRecord, RetryStatus, SessionState

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
