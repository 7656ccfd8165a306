r"""Utility functions for retry policies.

This package provides helpers for parameter validation, sleep time
calculation with backoff and jitter, retry-after hint extraction, and
structured logging.
"""

from __future__ import annotations

__all__ = [
    "calculate_sleep_time",
    "extract_retry_after",
    "parse_retry_after",
    "validate_backoff_params",
    "validate_delay",
    "validate_retries",
]

from aretry.utils.retry_after import extract_retry_after, parse_retry_after
from aretry.utils.sleep import calculate_sleep_time
from aretry.utils.validation import validate_backoff_params, validate_delay, validate_retries
