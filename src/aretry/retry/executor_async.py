r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that drives a retry
session as an explicit state machine, so that large retry budgets do not
grow the call stack.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "ExecutorState"]

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.exceptions import as_exception
from aretry.retry.decider import RetryDecider
from aretry.retry.executor_core import AttemptOutcome, AttemptSettlement
from aretry.retry.manager import CallbackManager
from aretry.retry.strategy import DelayStrategy
from aretry.status import ErrorRecord, RetryStatus, SessionState, utc_now

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from datetime import datetime

    from aretry.retry.config import RetryOptions

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class ExecutorState(Enum):
    """States of the retry loop."""

    ATTEMPTING = "attempting"
    EVALUATING_RETRY = "evaluating_retry"
    DELAYING = "delaying"
    SETTLED = "settled"


class AsyncRetryExecutor:
    """Executes an operation with automatic retry logic.

    The executor composes the following components:
    - RetryDecider: Determines whether a failed attempt is retried
    - DelayStrategy: Waits between attempts
    - CallbackManager: Invokes the notification hooks

    The executor keeps no per-session state, so one instance can run
    several sessions concurrently. Each call to ``execute`` owns its
    ``RetryStatus``.

    Attributes:
        options: The retry policy.
        decider: Logic for deciding whether to retry.
        strategy: Delay applied between attempts.
        callbacks: Manager for invoking hooks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.retry import AsyncRetryExecutor, RetryOptions
        >>> calls = []
        >>> def operation(settle_success, settle_failure, status):
        ...     calls.append(status.count)
        ...     if status.count < 2:
        ...         raise ConnectionError("flaky")
        ...     return "done"
        ...
        >>> executor = AsyncRetryExecutor(RetryOptions(retries=3))
        >>> asyncio.run(executor.execute(operation))
        'done'
        >>> calls
        [0, 1, 2]

        ```
    """

    def __init__(self, options: RetryOptions) -> None:
        self.options = options
        self.decider: RetryDecider = RetryDecider(options.retries)
        self.strategy: DelayStrategy = DelayStrategy(options.delay)
        self.callbacks: CallbackManager = CallbackManager(options)

    async def execute(self, operation: Callable[..., T | Awaitable[T]]) -> T:
        """Run the operation until it succeeds, is rejected, or runs out
        of retries.

        The operation is called as
        ``operation(settle_success, settle_failure, status)`` and may
        return a value, return an awaitable, raise an exception, or call
        one of the settlement callables to force the outcome.

        Args:
            operation: The fallible operation.

        Returns:
            The success value of the session.

        Raises:
            Exception: The terminal rejection reason. This is the last
                error for an exhausted budget, or the reason passed to
                ``settle_failure`` (wrapped in ``RejectedError`` when it is
                not an exception).
        """
        status: RetryStatus[T] = RetryStatus()
        state = ExecutorState.ATTEMPTING
        error: Any = None

        while state is not ExecutorState.SETTLED:
            if state is ExecutorState.ATTEMPTING:
                state, error = await self._attempt(operation, status)
            elif state is ExecutorState.EVALUATING_RETRY:
                state = await self._evaluate(error, status)
            else:
                state = await self._delay(status)

        if status.is_resolved:
            return status.resolved  # type: ignore[return-value]
        raise as_exception(status.rejected)

    async def _attempt(
        self, operation: Callable[..., Any], status: RetryStatus[Any]
    ) -> tuple[ExecutorState, Any]:
        logger.debug(f"Starting attempt {status.attempts}")
        settlement = AttemptSettlement(status, attempt=status.attempts)
        outcome, payload = await settlement.run(operation)

        if outcome is AttemptOutcome.RESOLVED:
            status.end_at = utc_now()
            logger.debug(f"Attempt {status.attempts} succeeded")
            await self.callbacks.on_resolved(payload, status)
            return ExecutorState.SETTLED, None

        if outcome is AttemptOutcome.REJECTED:
            logger.debug(f"Attempt {status.attempts} was rejected: {payload!r}")
            await self.callbacks.on_rejected(payload, status)
        else:
            logger.debug(f"Attempt {status.attempts} failed: {payload!r}")
        return ExecutorState.EVALUATING_RETRY, payload

    async def _evaluate(self, error: Any, status: RetryStatus[Any]) -> ExecutorState:
        # A resolution can never be overturned by a later failure
        if status.is_resolved:
            return ExecutorState.SETTLED

        now = utc_now()
        status.errors.append(ErrorRecord(error=error, occurred_at=now))
        status.duration = (now - status.start_at).total_seconds() * 1000

        try:
            should_retry, reason = await self.decider.should_retry(status)
        except Exception as exc:
            logger.debug(f"Retry predicate raised {exc!r}")
            await self._reject(exc, status, now)
            return ExecutorState.SETTLED

        if not should_retry:
            logger.debug(f"Giving up after {status.attempts} attempts ({reason})")
            await self._reject(error, status, now)
            return ExecutorState.SETTLED

        logger.debug(f"Attempt {status.attempts} will be retried ({reason})")
        await self.callbacks.on_retry(error, status)
        status.count += 1
        return ExecutorState.DELAYING

    async def _delay(self, status: RetryStatus[Any]) -> ExecutorState:
        try:
            await self.strategy.wait(status)
        except Exception as exc:
            logger.debug(f"Delay raised {exc!r}")
            await self._reject(exc, status, utc_now())
            return ExecutorState.SETTLED
        return ExecutorState.ATTEMPTING

    async def _reject(self, error: Any, status: RetryStatus[Any], now: datetime) -> None:
        status.end_at = now
        if status.is_rejected:
            # A forced rejection stays the reason of the session
            return
        status.rejected = error
        status.state = SessionState.REJECTED
        await self.callbacks.on_rejected(error, status)
