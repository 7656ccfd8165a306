r"""Configuration dataclass for retry behavior.

This module provides the ``RetryOptions`` policy object consumed by the
retry executor.
"""

from __future__ import annotations

__all__ = ["RetryOptions"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aretry.utils.validation import validate_delay, validate_retries

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import TypeAlias

    from aretry.status import RetryStatus

    RetriesPredicate: TypeAlias = Callable[[RetryStatus[Any]], bool | Awaitable[bool]]
    DelayCallback: TypeAlias = Callable[[RetryStatus[Any]], float | None | Awaitable[float | None]]
    Hook: TypeAlias = Callable[[Any, RetryStatus[Any]], None | Awaitable[None]]


@dataclass
class RetryOptions:
    """Policy for one retry session.

    Attributes:
        retries: Retry budget. An integer is the maximum number of retries
            after the initial attempt. A callable receives the live status
            and returns (or resolves to) whether another attempt is allowed.
        delay: Wait before each retry. A number is a duration in seconds.
            A callable receives the live status; if it returns ``None`` it
            is responsible for its own wait, if it returns a number the
            executor sleeps that many seconds.
        on_retry: Optional hook ``(error, status)`` invoked before each retry.
        on_rejected: Optional hook ``(error, status)`` invoked once when the
            session is rejected.
        on_resolved: Optional hook ``(value, status)`` invoked once when the
            session is resolved.

    Raises:
        TypeError: If ``retries`` or ``delay`` has an unsupported type.
        ValueError: If ``retries`` or ``delay`` is negative.

    Example:
        ```pycon
        >>> from aretry.retry import RetryOptions
        >>> RetryOptions(retries=3, delay=0.5)
        RetryOptions(retries=3, delay=0.5, on_retry=None, on_rejected=None, on_resolved=None)

        ```
    """

    retries: int | RetriesPredicate = 0
    delay: float | DelayCallback = 0.0
    on_retry: Hook | None = None
    on_rejected: Hook | None = None
    on_resolved: Hook | None = None

    def __post_init__(self) -> None:
        validate_retries(self.retries)
        validate_delay(self.delay)
