r"""Exceptions raised by the retry executor."""

from __future__ import annotations

__all__ = ["RejectedError", "as_exception"]

from typing import Any


class RejectedError(Exception):
    """Raised when a session is rejected with a reason that is not an
    exception.

    ``settle_failure`` accepts any value as rejection reason. Since only
    exceptions can be raised, non-exception reasons are wrapped in this
    class. The raw reason is kept in ``status.rejected`` and in the
    ``reason`` attribute.

    Args:
        reason: The rejection reason.

    Example:
        ```pycon
        >>> from aretry.exceptions import RejectedError
        >>> error = RejectedError({"ok": False})
        >>> error.reason
        {'ok': False}
        >>> str(error)
        "Operation rejected: {'ok': False}"

        ```
    """

    def __init__(self, reason: Any = None) -> None:
        self.reason = reason
        if reason is None:
            super().__init__("Operation rejected")
        else:
            super().__init__(f"Operation rejected: {reason!r}")


def as_exception(reason: Any) -> BaseException:
    """Return a raisable exception for a rejection reason.

    Args:
        reason: The rejection reason.

    Returns:
        ``reason`` itself if it is an exception, otherwise a
        ``RejectedError`` wrapping it.
    """
    if isinstance(reason, BaseException):
        return reason
    return RejectedError(reason)
