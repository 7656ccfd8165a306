r"""Retry package implementing class-based composition pattern.

This package provides a modular retry execution system using composition
and strategy patterns for improved maintainability and testability.

Public API:
    - RetryOptions: Retry policy (budget, delay, hooks)
    - RetryDecider: Logic for deciding whether to retry
    - DelayStrategy: Wait applied between attempts
    - CallbackManager: Manager for hook invocations
    - AttemptSettlement: First-writer-wins outcome of one attempt
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AttemptOutcome",
    "AttemptSettlement",
    "CallbackManager",
    "DelayStrategy",
    "ExecutorState",
    "RetryDecider",
    "RetryOptions",
]

from aretry.retry.config import RetryOptions
from aretry.retry.decider import RetryDecider
from aretry.retry.executor_async import AsyncRetryExecutor, ExecutorState
from aretry.retry.executor_core import AttemptOutcome, AttemptSettlement
from aretry.retry.manager import CallbackManager
from aretry.retry.strategy import DelayStrategy
