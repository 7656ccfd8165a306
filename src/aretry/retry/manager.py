r"""Callback manager for retry lifecycle notifications.

This module provides the CallbackManager class that invokes the
user-defined ``on_retry``, ``on_rejected`` and ``on_resolved`` hooks.
Hooks are notifications: a failing hook is logged and ignored so that
it never changes the outcome of the session.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.retry.config import Hook, RetryOptions
    from aretry.status import RetryStatus

logger: logging.Logger = logging.getLogger(__name__)


class CallbackManager:
    """Manages hook invocations during the retry lifecycle.

    Both plain functions and coroutine functions are accepted as hooks.

    Attributes:
        options: Retry options holding the hooks.
    """

    def __init__(self, options: RetryOptions) -> None:
        """Initialize callback manager.

        Args:
            options: Retry options holding the hooks.
        """
        self.options = options

    async def on_retry(self, error: Any, status: RetryStatus[Any]) -> None:
        """Invoke on_retry hook.

        Args:
            error: The error that triggered the retry.
            status: The live retry status.
        """
        await self._invoke("on_retry", self.options.on_retry, error, status)

    async def on_rejected(self, error: Any, status: RetryStatus[Any]) -> None:
        """Invoke on_rejected hook.

        Args:
            error: The terminal rejection reason.
            status: The live retry status.
        """
        await self._invoke("on_rejected", self.options.on_rejected, error, status)

    async def on_resolved(self, value: Any, status: RetryStatus[Any]) -> None:
        """Invoke on_resolved hook.

        Args:
            value: The success value.
            status: The live retry status.
        """
        await self._invoke("on_resolved", self.options.on_resolved, value, status)

    @staticmethod
    async def _invoke(
        name: str, hook: Hook | None, payload: Any, status: RetryStatus[Any]
    ) -> None:
        if hook is None:
            return
        try:
            result = hook(payload, status)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"{name} hook raised an exception (attempt {status.attempts})")
