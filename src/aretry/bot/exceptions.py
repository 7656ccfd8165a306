r"""Exceptions raised by the bot API client."""

from __future__ import annotations

__all__ = ["BotApiError"]

from collections.abc import Mapping
from typing import Any

RATE_LIMIT_ERROR_CODE = 429


class BotApiError(Exception):
    """Raised when a bot API method returns an error payload.

    Args:
        method: The API method that failed (e.g. ``"getMe"``).
        error_code: The error code reported by the API, usually the HTTP
            status code.
        description: The human-readable description reported by the API.
        retry_after: Optional number of seconds the API asks the client to
            wait before the next request.
        payload: The decoded response payload, if any.

    Example:
        ```pycon
        >>> from aretry.bot import BotApiError
        >>> error = BotApiError("sendMessage", 429, "Too Many Requests", retry_after=3)
        >>> error.is_rate_limited, error.is_retryable
        (True, True)
        >>> str(error)
        'sendMessage failed with error 429: Too Many Requests'

        ```
    """

    def __init__(
        self,
        method: str,
        error_code: int,
        description: str,
        retry_after: float | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{method} failed with error {error_code}: {description}")
        self.method = method
        self.error_code = error_code
        self.description = description
        self.retry_after = retry_after
        self.payload = payload

    @property
    def is_rate_limited(self) -> bool:
        return self.error_code == RATE_LIMIT_ERROR_CODE

    @property
    def is_retryable(self) -> bool:
        """Whether the error is transient (rate limit or server error)."""
        return self.is_rate_limited or self.error_code >= 500

    @classmethod
    def from_payload(
        cls, method: str, payload: Mapping[str, Any], status_code: int
    ) -> BotApiError:
        """Build an error from a decoded error payload.

        Args:
            method: The API method that failed.
            payload: The decoded payload, e.g. ``{"ok": false,
                "error_code": 429, "description": "...",
                "parameters": {"retry_after": 3}}``.
            status_code: The HTTP status code, used when the payload has
                no ``error_code``.

        Returns:
            The matching error.
        """
        parameters = payload.get("parameters")
        retry_after = None
        if isinstance(parameters, Mapping):
            retry_after = parameters.get("retry_after")
        return cls(
            method=method,
            error_code=int(payload.get("error_code", status_code)),
            description=str(payload.get("description", "unknown error")),
            retry_after=retry_after,
            payload=payload,
        )
