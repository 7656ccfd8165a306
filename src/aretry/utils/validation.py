r"""Parameter validation utilities for retry options.

This module provides validation functions for the retry budget, the
inter-attempt delay, and backoff parameters so that configuration
mistakes surface before the first attempt runs.
"""

from __future__ import annotations

__all__ = ["validate_backoff_params", "validate_delay", "validate_retries"]

from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_retries(retries: Any) -> None:
    """Validate the retry budget.

    Args:
        retries: Either a non-negative integer (maximum number of retries
            after the initial attempt) or a callable predicate over the
            retry status.

    Raises:
        TypeError: If ``retries`` is neither an integer nor callable.
        ValueError: If ``retries`` is a negative integer.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_retries
        >>> validate_retries(3)
        >>> validate_retries(lambda status: status.count < 2)
        >>> validate_retries(-1)
        Traceback (most recent call last):
        ...
        ValueError: retries must be >= 0, got -1

        ```
    """
    if callable(retries):
        return
    if not isinstance(retries, int) or isinstance(retries, bool):
        msg = f"retries must be an int or a callable, got {type(retries).__name__}"
        raise TypeError(msg)
    if retries < 0:
        msg = f"retries must be >= 0, got {retries}"
        raise ValueError(msg)


def validate_delay(delay: Any) -> None:
    """Validate the inter-attempt delay.

    Args:
        delay: Either a non-negative number of seconds or a callable over
            the retry status.

    Raises:
        TypeError: If ``delay`` is neither a number nor callable.
        ValueError: If ``delay`` is a negative number.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_delay
        >>> validate_delay(0.5)
        >>> validate_delay(-0.5)
        Traceback (most recent call last):
        ...
        ValueError: delay must be >= 0, got -0.5

        ```
    """
    if callable(delay):
        return
    if not _is_number(delay):
        msg = f"delay must be a number or a callable, got {type(delay).__name__}"
        raise TypeError(msg)
    if delay < 0:
        msg = f"delay must be >= 0, got {delay}"
        raise ValueError(msg)


def validate_backoff_params(
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> None:
    """Validate jitter and wait-time cap parameters.

    Args:
        jitter_factor: Factor for adding random jitter to delays.
            Must be >= 0.
        max_wait_time: Optional maximum delay cap in seconds. Must be > 0
            if provided.

    Raises:
        ValueError: If a parameter is out of range.
    """
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)
