r"""Unit tests for asynchronous retry executor."""

from __future__ import annotations

import asyncio

import pytest

from aretry.retry import AsyncRetryExecutor, ExecutorState, RetryOptions
from aretry.retry.decider import RetryDecider
from aretry.retry.manager import CallbackManager
from aretry.retry.strategy import DelayStrategy
from tests.helpers import ScriptedOperation


def test_async_retry_executor_creation() -> None:
    options = RetryOptions(retries=3, delay=0.5)

    executor = AsyncRetryExecutor(options)

    assert executor.options is options
    assert isinstance(executor.decider, RetryDecider)
    assert executor.decider.retries == 3
    assert isinstance(executor.strategy, DelayStrategy)
    assert executor.strategy.delay == 0.5
    assert isinstance(executor.callbacks, CallbackManager)


def test_executor_states() -> None:
    assert [state.name for state in ExecutorState] == [
        "ATTEMPTING",
        "EVALUATING_RETRY",
        "DELAYING",
        "SETTLED",
    ]


@pytest.mark.asyncio
async def test_async_retry_executor_successful_operation() -> None:
    operation = ScriptedOperation(["value"])

    assert await AsyncRetryExecutor(RetryOptions(retries=3)).execute(operation) == "value"
    assert operation.calls == 1


@pytest.mark.asyncio
async def test_async_retry_executor_exhausts_retries() -> None:
    operation = ScriptedOperation([OSError("down")])

    with pytest.raises(OSError, match=r"down"):
        await AsyncRetryExecutor(RetryOptions(retries=2)).execute(operation)

    assert operation.calls == 3


@pytest.mark.asyncio
async def test_each_execution_owns_its_status() -> None:
    executor = AsyncRetryExecutor(RetryOptions(retries=2))
    first = ScriptedOperation([OSError(), "first"])
    second = ScriptedOperation([OSError(), OSError(), "second"])

    results = await asyncio.gather(executor.execute(first), executor.execute(second))

    assert results == ["first", "second"]
    assert first.status is not second.status
    assert first.status.count == 1
    assert second.status.count == 2


@pytest.mark.asyncio
async def test_next_attempt_starts_after_previous_one_settles() -> None:
    running = 0
    overlaps = []

    async def operation(settle_success, settle_failure, status):  # noqa: ARG001
        nonlocal running
        running += 1
        overlaps.append(running)
        await asyncio.sleep(0)
        running -= 1
        if status.count < 3:
            raise OSError
        return "done"

    assert await AsyncRetryExecutor(RetryOptions(retries=5)).execute(operation) == "done"
    assert overlaps == [1, 1, 1, 1]
