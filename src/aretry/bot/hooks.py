r"""Logging hooks for bot API retry sessions."""

from __future__ import annotations

__all__ = ["LoggingHooks"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.bot.exceptions import BotApiError
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.status import RetryStatus


class LoggingHooks:
    """Observer emitting structured records for retries and rejections.

    Args:
        logger: The logger to write to. Defaults to the module logger.

    Example:
        ```pycon
        >>> import logging
        >>> from aretry import retry_async
        >>> from aretry.bot import LoggingHooks
        >>> hooks = LoggingHooks(logging.getLogger("my_bot"))
        >>> # await retry_async(op, retries=5, on_retry=hooks.on_retry, on_rejected=hooks.on_rejected)

        ```
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def on_retry(self, error: Any, status: RetryStatus[Any]) -> None:
        fields = _error_fields(error)
        if isinstance(error, BotApiError) and error.is_rate_limited:
            log_structured(
                self.logger,
                logging.WARNING,
                f"Rate limited: {error.description}, retry after {error.retry_after}s",
                retry=status.count + 1,
                **fields,
            )
            return
        log_structured(
            self.logger,
            logging.INFO,
            f"Retry attempt {status.count + 1}: {error}",
            retry=status.count + 1,
            **fields,
        )

    def on_rejected(self, error: Any, status: RetryStatus[Any]) -> None:
        log_structured(
            self.logger,
            logging.ERROR,
            f"All retry attempts failed after {status.attempts} attempts: {error}",
            attempts=status.attempts,
            duration_ms=status.duration,
            **_error_fields(error),
        )


def _error_fields(error: Any) -> dict[str, Any]:
    if isinstance(error, BotApiError):
        return {
            "api_method": error.method,
            "error_code": error.error_code,
            "retry_after": error.retry_after,
        }
    return {"error_type": type(error).__name__}
