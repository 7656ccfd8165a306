r"""Backoff strategies for retry delays.

This package provides backoff strategies for calculating the wait before
a retry, including exponential, linear, and constant patterns.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "LinearBackoff",
]

from aretry.backoff.base import BaseBackoffStrategy
from aretry.backoff.constant import ConstantBackoff
from aretry.backoff.exponential import ExponentialBackoff
from aretry.backoff.linear import LinearBackoff
