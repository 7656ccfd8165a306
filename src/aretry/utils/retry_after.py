r"""Retry-after hint utilities.

This module provides functions for reading a server-communicated
"retry after N seconds" hint, either from a raw header value or from a
structured error raised by an attempt.
"""

from __future__ import annotations

__all__ = ["extract_retry_after", "parse_retry_after"]

import logging
from collections.abc import Mapping
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(retry_after: str | float | None) -> float | None:
    """Parse a Retry-After value.

    The value can be a number of seconds (e.g. ``"120"`` or ``120``) or
    an HTTP-date in RFC 5322 format (e.g.
    ``"Wed, 21 Oct 2015 07:28:00 GMT"``).

    Args:
        retry_after: The raw value, or None if absent.

    Returns:
        The number of seconds to wait, or None if the value is absent,
        negative, or cannot be parsed. Dates in the past are clamped to 0.0.

    Example:
        ```pycon
        >>> from aretry.utils import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(5)
        5.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after is None or isinstance(retry_after, bool):
        return None

    with suppress(ValueError, TypeError):
        seconds = float(retry_after)
        if seconds < 0:
            return None
        return seconds

    if not isinstance(retry_after, str):
        return None

    try:
        retry_date: datetime = parsedate_to_datetime(retry_after)
        now = datetime.now(timezone.utc)
        return max(0.0, (retry_date - now).total_seconds())
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After value: {retry_after!r}")
        return None


def extract_retry_after(error: Any) -> float | None:
    """Extract a retry-after hint from a structured error.

    The following shapes are recognized, in order:
    1. an object with a ``retry_after`` attribute
    2. a mapping with ``parameters.retry_after`` or ``retry_after``
    3. an ``httpx.HTTPStatusError`` whose response has a ``Retry-After``
       header

    Args:
        error: The error recorded for the last failed attempt.

    Returns:
        The hint in seconds, or None if the error carries none.

    Example:
        ```pycon
        >>> from aretry.utils import extract_retry_after
        >>> extract_retry_after({"ok": False, "parameters": {"retry_after": 3}})
        3.0
        >>> extract_retry_after(ValueError("boom")) is None
        True

        ```
    """
    if error is None:
        return None

    hint = getattr(error, "retry_after", None)
    if hint is not None:
        return parse_retry_after(hint)

    if isinstance(error, Mapping):
        parameters = error.get("parameters")
        if isinstance(parameters, Mapping) and parameters.get("retry_after") is not None:
            return parse_retry_after(parameters["retry_after"])
        return parse_retry_after(error.get("retry_after"))

    if isinstance(error, httpx.HTTPStatusError):
        return parse_retry_after(error.response.headers.get("Retry-After"))
    return None
