r"""Unit tests for callback manager."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from aretry.retry.config import RetryOptions
from aretry.retry.manager import CallbackManager
from aretry.status import RetryStatus


def test_callback_manager_creation() -> None:
    options = RetryOptions()
    manager = CallbackManager(options)
    assert manager.options is options


@pytest.mark.asyncio
async def test_missing_hooks_are_skipped() -> None:
    manager = CallbackManager(RetryOptions())
    status = RetryStatus()
    await manager.on_retry(ValueError(), status)
    await manager.on_rejected(ValueError(), status)
    await manager.on_resolved("value", status)


@pytest.mark.asyncio
async def test_sync_hooks_invoked(mock_callback: Mock) -> None:
    manager = CallbackManager(
        RetryOptions(on_retry=mock_callback, on_rejected=mock_callback, on_resolved=mock_callback)
    )
    status = RetryStatus()
    error = ValueError("boom")

    await manager.on_retry(error, status)
    await manager.on_rejected(error, status)
    await manager.on_resolved("value", status)

    assert mock_callback.call_count == 3
    mock_callback.assert_called_with("value", status)


@pytest.mark.asyncio
async def test_async_hook_awaited() -> None:
    hook = AsyncMock()
    manager = CallbackManager(RetryOptions(on_resolved=hook))
    status = RetryStatus()

    await manager.on_resolved(42, status)

    hook.assert_awaited_once_with(42, status)


@pytest.mark.asyncio
@pytest.mark.parametrize("hook", [Mock(side_effect=KeyError("x")), AsyncMock(side_effect=KeyError("x"))])
async def test_hook_failure_is_logged_and_isolated(
    hook: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    manager = CallbackManager(RetryOptions(on_rejected=hook))

    with caplog.at_level(logging.ERROR):
        await manager.on_rejected(ValueError(), RetryStatus())

    assert "on_rejected hook raised an exception (attempt 1)" in caplog.text
    assert caplog.records[-1].exc_info is not None
