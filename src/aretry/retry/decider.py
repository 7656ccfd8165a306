r"""Retry decision logic.

This module provides the RetryDecider class that decides whether a
failed attempt should be followed by another one.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.retry.config import RetriesPredicate
    from aretry.status import RetryStatus

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        retries: Fixed retry budget or (async) predicate over the status.
    """

    def __init__(self, retries: int | RetriesPredicate) -> None:
        self.retries = retries

    async def should_retry(self, status: RetryStatus[Any]) -> tuple[bool, str]:
        """Determine if another attempt is permitted.

        Args:
            status: The live retry status. The failure being evaluated is
                already recorded in ``status.errors``.

        Returns:
            Tuple of (should_retry, reason).
        """
        if status.is_rejected:
            return (False, "rejected")

        if callable(self.retries):
            result = self.retries(status)
            if inspect.isawaitable(result):
                result = await result
            if not result:
                logger.debug(f"Retries predicate declined a retry after attempt {status.attempts}")
                return (False, "retries predicate returned False")
            return (True, "retries predicate")

        if status.count >= self.retries:
            logger.debug(f"Retry budget of {self.retries} exhausted after attempt {status.attempts}")
            return (False, "max retries exhausted")
        return (True, f"retry {status.count + 1}/{self.retries}")
