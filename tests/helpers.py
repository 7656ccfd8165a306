r"""Shared test helpers for retry session tests."""

from __future__ import annotations

__all__ = ["ScriptedOperation"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.status import RetryStatus


class ScriptedOperation:
    """Async operation returning or raising scripted outcomes.

    Each call consumes the next outcome: an exception instance is raised,
    any other value is returned. The last outcome is repeated once the
    script is exhausted.

    Attributes:
        calls: Number of times the operation was called.
        counts: ``status.count`` observed at each call.
        statuses: The status objects received.
    """

    def __init__(self, outcomes: Iterable[Any]) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0
        self.counts: list[int] = []
        self.statuses: list[RetryStatus[Any]] = []

    async def __call__(
        self,
        settle_success: Callable[[Any], None],
        settle_failure: Callable[[Any], None],
        status: RetryStatus[Any],
    ) -> Any:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        self.counts.append(status.count)
        self.statuses.append(status)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def status(self) -> RetryStatus[Any]:
        """The status of the session (the same object at every call)."""
        return self.statuses[-1]
