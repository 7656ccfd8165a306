r"""Integration tests for the bot API client against a mocked transport."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, call

import httpx
import pytest

from aretry.bot import BotApiClient, BotApiError

if TYPE_CHECKING:
    from collections.abc import Callable

TOKEN = "123:ABC"


class FakeBotApi:
    """Mock transport handler replaying scripted responses."""

    def __init__(self, responses: list[httpx.Response | Exception]) -> None:
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses[min(len(self.requests), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


def ok(result: Any) -> httpx.Response:
    return httpx.Response(200, json={"ok": True, "result": result})


def error(status_code: int, description: str, **parameters: Any) -> httpx.Response:
    payload: dict[str, Any] = {"ok": False, "error_code": status_code, "description": description}
    if parameters:
        payload["parameters"] = parameters
    return httpx.Response(status_code, json=payload)


def make_client(api: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> BotApiClient:
    return BotApiClient(
        TOKEN,
        client=httpx.AsyncClient(transport=httpx.MockTransport(api)),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_me() -> None:
    api = FakeBotApi([ok({"id": 1, "is_bot": True})])

    async with make_client(api) as bot:
        assert await bot.get_me() == {"id": 1, "is_bot": True}

    request = api.requests[0]
    assert request.method == "POST"
    assert request.url == f"https://api.telegram.org/bot{TOKEN}/getMe"
    assert json.loads(request.content) == {}


@pytest.mark.asyncio
async def test_call_sends_params_as_json() -> None:
    api = FakeBotApi([ok({"message_id": 10})])

    async with make_client(api, base_url="https://bots.example.com/") as bot:
        assert await bot.call("sendMessage", chat_id=42, text="hi") == {"message_id": 10}

    assert api.requests[0].url == f"https://bots.example.com/bot{TOKEN}/sendMessage"
    assert json.loads(api.requests[0].content) == {"chat_id": 42, "text": "hi"}


@pytest.mark.asyncio
async def test_rate_limited_request_waits_requested_time(mock_asleep: AsyncMock) -> None:
    api = FakeBotApi([error(429, "Too Many Requests: retry after 7", retry_after=7), ok(True)])

    async with make_client(api) as bot:
        assert await bot.call("sendMessage", chat_id=1, text="x") is True

    assert len(api.requests) == 2
    mock_asleep.assert_awaited_once_with(7.0)


@pytest.mark.asyncio
async def test_token_stays_out_of_package_logs(
    mock_asleep: AsyncMock,  # noqa: ARG001
    caplog: pytest.LogCaptureFixture,
) -> None:
    api = FakeBotApi(
        [
            error(429, "Too Many Requests", retry_after=1),
            httpx.Response(502, text="Bad Gateway"),
            error(400, "Bad Request: chat not found"),
        ]
    )

    with caplog.at_level(logging.DEBUG, logger="aretry"):
        async with make_client(api) as bot:
            with pytest.raises(BotApiError):
                await bot.call("sendMessage", chat_id=1, text="x")

    records = [record for record in caplog.records if record.name.startswith("aretry")]
    assert records
    assert all(TOKEN not in record.getMessage() for record in records)


@pytest.mark.asyncio
async def test_server_errors_use_exponential_backoff(mock_asleep: AsyncMock) -> None:
    api = FakeBotApi(
        [
            httpx.Response(502, text="<html>Bad Gateway</html>"),
            error(500, "Internal Server Error"),
            ok("done"),
        ]
    )

    async with make_client(api) as bot:
        assert await bot.get_me() == "done"

    assert mock_asleep.call_args_list == [call(2.0), call(4.0)]


@pytest.mark.asyncio
async def test_transport_errors_are_retried(mock_asleep: AsyncMock) -> None:
    api = FakeBotApi([httpx.ConnectError("connection refused"), ok("done")])

    async with make_client(api) as bot:
        assert await bot.get_me() == "done"

    assert len(api.requests) == 2
    mock_asleep.assert_awaited_once()


@pytest.mark.asyncio
async def test_exhausted_retries_raise_last_error(mock_asleep: AsyncMock) -> None:
    api = FakeBotApi([error(503, "Service Unavailable")])

    async with make_client(api, retries=2) as bot:
        with pytest.raises(BotApiError) as exc_info:
            await bot.get_me()

    assert exc_info.value.error_code == 503
    assert len(api.requests) == 3
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
async def test_client_error_is_not_retried(mock_asleep: AsyncMock) -> None:
    api = FakeBotApi([error(401, "Unauthorized"), ok("never")])

    async with make_client(api) as bot:
        with pytest.raises(BotApiError, match=r"Unauthorized"):
            await bot.get_me()

    assert len(api.requests) == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_error_payload_in_successful_response_is_not_retried() -> None:
    api = FakeBotApi([httpx.Response(200, json={"ok": False, "description": "chat not found"})])

    async with make_client(api) as bot:
        with pytest.raises(BotApiError, match=r"chat not found") as exc_info:
            await bot.call("sendMessage", chat_id=0, text="x")

    assert exc_info.value.error_code == 200
    assert len(api.requests) == 1


@pytest.mark.asyncio
async def test_custom_delay() -> None:
    api = FakeBotApi([error(500, "Internal Server Error"), ok("done")])
    delay = AsyncMock(return_value=None)

    async with make_client(api, delay=delay) as bot:
        assert await bot.get_me() == "done"

    delay.assert_awaited_once()


@pytest.mark.asyncio
async def test_owned_client_is_closed() -> None:
    bot = BotApiClient(TOKEN)
    async with bot:
        pass
    assert bot._client.is_closed


@pytest.mark.asyncio
async def test_external_client_is_not_closed() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(FakeBotApi([ok(None)])))
    async with BotApiClient(TOKEN, client=client):
        pass
    assert not client.is_closed
    await client.aclose()


def test_empty_token() -> None:
    with pytest.raises(ValueError, match=r"token must be a non-empty string"):
        BotApiClient("")


def test_invalid_retries() -> None:
    with pytest.raises(ValueError, match=r"retries must be >= 0"):
        BotApiClient(TOKEN, retries=-1)
