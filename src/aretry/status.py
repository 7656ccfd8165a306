r"""Retry status data model.

This module provides the ``RetryStatus`` dataclass that accumulates the
attempt count, timing, and error history of one retry session. The
status is mutated only by the retry executor and is passed by reference
to every policy callback, so callbacks always observe live values.
"""

from __future__ import annotations

__all__ = ["ErrorRecord", "RetryStatus", "SessionState", "utc_now"]

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class SessionState(Enum):
    """Settlement state of a retry session.

    The state is monotonic: once it leaves ``PENDING`` it never changes.
    """

    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ErrorRecord:
    """One failed attempt.

    Attributes:
        error: The error raised by (or forced on) the attempt.
        occurred_at: When the failure was recorded.
    """

    error: Any
    occurred_at: datetime


@dataclass
class RetryStatus(Generic[T]):
    """Attempt history of one retry session.

    Attributes:
        count: Number of retries issued so far. It is 0 during the initial
            attempt and is incremented only when a retry is decided.
        start_at: When the session started.
        end_at: When the session reached a terminal state, ``None`` while
            attempts are ongoing.
        duration: Milliseconds between ``start_at`` and the most recently
            recorded failure.
        errors: Chronological, append-only list of failed attempts.
        resolved: The success value, meaningful only if ``state`` is
            ``SessionState.RESOLVED``.
        rejected: The terminal failure reason, meaningful only if ``state``
            is ``SessionState.REJECTED``.
        state: Settlement state of the session.

    Example:
        ```pycon
        >>> from aretry.status import RetryStatus
        >>> status = RetryStatus()
        >>> status.count, status.attempts, status.is_settled
        (0, 1, False)
        >>> status.last_error is None
        True

        ```
    """

    count: int = 0
    start_at: datetime = field(default_factory=utc_now)
    end_at: datetime | None = None
    duration: float = 0.0
    errors: list[ErrorRecord] = field(default_factory=list)
    resolved: T | None = None
    rejected: Any = None
    state: SessionState = SessionState.PENDING

    @property
    def attempts(self) -> int:
        """Number of attempts started so far (initial attempt included)."""
        return self.count + 1

    @property
    def last_error(self) -> Any:
        """The most recently recorded error, or ``None``."""
        if not self.errors:
            return None
        return self.errors[-1].error

    @property
    def is_resolved(self) -> bool:
        return self.state is SessionState.RESOLVED

    @property
    def is_rejected(self) -> bool:
        return self.state is SessionState.REJECTED

    @property
    def is_settled(self) -> bool:
        return self.state is not SessionState.PENDING
