r"""Per-attempt settlement logic for the retry executor.

An attempt can be settled through two independent channels: the
``settle_success`` / ``settle_failure`` callables handed to the
operation, and the operation's own return value or raised exception.
The first signal wins. Every later signal for the same attempt is a
no-op, which makes the race deterministic whatever the scheduling order.
"""

from __future__ import annotations

__all__ = ["AttemptOutcome", "AttemptSettlement"]

import asyncio
import inspect
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from aretry.status import SessionState

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.status import RetryStatus

logger: logging.Logger = logging.getLogger(__name__)


class AttemptOutcome(Enum):
    """How an attempt ended."""

    RESOLVED = "resolved"
    FAILED = "failed"
    REJECTED = "rejected"


class AttemptSettlement:
    """First-writer-wins outcome of a single attempt.

    ``settle_success`` and ``settle_failure`` write the session status
    directly, so a forced settlement becomes visible to the caller and to
    policy callbacks as soon as it happens. A plain failure is only
    reported; recording it is left to the executor.

    Args:
        status: The live status of the session.
        attempt: The attempt number (1-indexed), used for logging.
    """

    def __init__(self, status: RetryStatus[Any], attempt: int) -> None:
        self.status = status
        self.attempt = attempt
        self.task: asyncio.Future[Any] | None = None
        self._outcome: asyncio.Future[tuple[AttemptOutcome, Any]] = (
            asyncio.get_running_loop().create_future()
        )

    @property
    def done(self) -> bool:
        """Whether the outcome of the attempt is decided."""
        return self._outcome.done()

    def settle_success(self, value: Any = None) -> None:
        """Resolve the attempt, and the session, with ``value``.

        An awaitable value wins the race right away, but the session is
        only resolved once ``run`` has awaited it.

        Args:
            value: The success value, or an awaitable of it.
        """
        if self._ignore_late("success"):
            return
        if not inspect.isawaitable(value):
            self.status.resolved = value
            self.status.state = SessionState.RESOLVED
        self._outcome.set_result((AttemptOutcome.RESOLVED, value))

    def settle_failure(self, reason: Any = None) -> None:
        """Reject the session with ``reason``, bypassing the retry budget.

        Args:
            reason: The rejection reason. It does not need to be an
                exception.
        """
        if self._ignore_late("failure"):
            return
        self.status.rejected = reason
        self.status.state = SessionState.REJECTED
        self._outcome.set_result((AttemptOutcome.REJECTED, reason))

    def fail(self, error: Exception) -> None:
        """Report a plain failure of the attempt.

        Args:
            error: The exception raised by the operation.
        """
        if self._ignore_late("exception"):
            return
        self._outcome.set_result((AttemptOutcome.FAILED, error))

    async def run(
        self, operation: Callable[..., Any]
    ) -> tuple[AttemptOutcome, Any]:
        """Run the operation and wait for the first settlement signal.

        The operation may return a value, return an awaitable, raise, or
        call one of the settlement callables. When a settlement callable
        wins while the operation is still running, the operation keeps
        running in the background and its result is discarded. An
        awaitable success value is awaited, and an exception raised while
        awaiting it fails the attempt.

        Args:
            operation: The operation, called as
                ``operation(settle_success, settle_failure, status)``.

        Returns:
            Tuple of (outcome, value or error).
        """
        try:
            result = operation(self.settle_success, self.settle_failure, self.status)
        except Exception as exc:
            self.fail(exc)
        else:
            if inspect.isawaitable(result):
                self.task = asyncio.ensure_future(result)
                self.task.add_done_callback(self._on_task_done)
            else:
                self.settle_success(result)

        outcome, value = await self._outcome
        if outcome is AttemptOutcome.RESOLVED and inspect.isawaitable(value):
            try:
                value = await value
            except Exception as exc:
                logger.debug(f"Awaiting the success value of attempt {self.attempt} raised {exc!r}")
                return (AttemptOutcome.FAILED, exc)
            self.status.resolved = value
            self.status.state = SessionState.RESOLVED
        return (outcome, value)

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            if not self._outcome.done():
                self._outcome.cancel()
            return
        exc = task.exception()
        if exc is None:
            self.settle_success(task.result())
        elif isinstance(exc, Exception):
            self.fail(exc)
        elif not self._outcome.done():
            self._outcome.set_exception(exc)

    def _ignore_late(self, signal: str) -> bool:
        if not self._outcome.done():
            return False
        logger.debug(f"Ignoring late {signal} signal for attempt {self.attempt}")
        return True
