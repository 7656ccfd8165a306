r"""Asynchronous client for a messaging bot HTTP API.

Every method call goes through ``retry_async``: transport errors, server
errors and rate-limit responses are retried with a rate-limit-aware
delay, while client errors and ``{"ok": false}`` payloads settle the
session as failed right away.
"""

from __future__ import annotations

__all__ = ["DEFAULT_BASE_URL", "BotApiClient"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from aretry.bot.exceptions import BotApiError
from aretry.bot.hooks import LoggingHooks
from aretry.bot.policy import RateLimitAwareDelay
from aretry.retry import RetryOptions
from aretry.retry_async import retry_async
from aretry.utils.validation import validate_retries

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from aretry.retry.config import DelayCallback
    from aretry.status import RetryStatus

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.telegram.org"


class BotApiClient:
    """Bot API client with automatic retry logic.

    Args:
        token: The bot token. It is part of the request URL and never
            appears in the records of the ``aretry`` loggers. ``httpx`` logs
            every request URL at INFO level, so raise the level of the
            ``httpx`` logger above INFO to keep the token out of the logs.
        base_url: The API root URL.
        client: Optional ``httpx.AsyncClient``. If None, the client creates
            and owns one.
        retries: Maximum number of retries per method call.
        delay: Delay policy. Defaults to ``RateLimitAwareDelay()``.
        hooks: Logging observer. Defaults to ``LoggingHooks()``.
        timeout: Timeout in seconds of the owned ``httpx.AsyncClient``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.bot import BotApiClient
        >>> async def main():
        ...     async with BotApiClient("123:ABC") as bot:
        ...         return await bot.get_me()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
        retries: int = 5,
        delay: float | DelayCallback | None = None,
        hooks: LoggingHooks | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not token:
            msg = "token must be a non-empty string"
            raise ValueError(msg)
        validate_retries(retries)
        self._token = token
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)
        self.hooks = hooks if hooks is not None else LoggingHooks()
        self.options = RetryOptions(
            retries=retries,
            delay=delay if delay is not None else RateLimitAwareDelay(),
            on_retry=self.hooks.on_retry,
            on_rejected=self.hooks.on_rejected,
        )

    async def __aenter__(self) -> BotApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying ``httpx.AsyncClient`` if it is owned."""
        if self._owns_client:
            await self._client.aclose()

    async def call(self, method: str, **params: Any) -> Any:
        """Call an API method.

        Args:
            method: The API method name (e.g. ``"sendMessage"``).
            **params: The method parameters, sent as JSON body.

        Returns:
            The ``result`` field of the successful payload.

        Raises:
            BotApiError: If the API reports an error after the retries, or
                a non-retryable error.
            httpx.TransportError: If the last attempt failed at the
                transport level.
        """
        return await retry_async(self._operation(method, params), self.options)

    async def get_me(self) -> Any:
        """Return basic information about the bot."""
        return await self.call("getMe")

    def _operation(self, method: str, params: dict[str, Any]) -> Callable[..., Any]:
        url = f"{self.base_url}/bot{self._token}/{method}"

        async def operation(
            settle_success: Callable[[Any], None],
            settle_failure: Callable[[Any], None],
            status: RetryStatus[Any],
        ) -> Any:
            logger.debug(f"Calling {method} (attempt {status.attempts})")
            response = await self._client.post(url, json=params)
            payload = _decode(response)

            if response.is_error:
                error = BotApiError.from_payload(method, payload, response.status_code)
                if error.is_retryable:
                    raise error
                settle_failure(error)
                return None

            if payload.get("ok") is not True:
                # Error reported in the body of a successful response
                settle_failure(BotApiError.from_payload(method, payload, response.status_code))
                return None
            return payload.get("result")

        return operation


def _decode(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        return payload
    return {
        "ok": False,
        "error_code": response.status_code,
        "description": response.reason_phrase or "invalid response body",
    }
