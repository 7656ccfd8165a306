r"""Unit tests for retry options."""

from __future__ import annotations

import dataclasses
from unittest.mock import Mock

import pytest

from aretry.retry.config import RetryOptions


def test_retry_options_defaults() -> None:
    options = RetryOptions()
    assert options.retries == 0
    assert options.delay == 0.0
    assert options.on_retry is None
    assert options.on_rejected is None
    assert options.on_resolved is None


def test_retry_options_with_callables() -> None:
    predicate, delay, hook = Mock(), Mock(), Mock()
    options = RetryOptions(retries=predicate, delay=delay, on_retry=hook)
    assert options.retries is predicate
    assert options.delay is delay
    assert options.on_retry is hook


def test_retry_options_negative_retries() -> None:
    with pytest.raises(ValueError, match=r"retries must be >= 0, got -2"):
        RetryOptions(retries=-2)


def test_retry_options_float_retries() -> None:
    with pytest.raises(TypeError, match=r"retries must be an int or a callable"):
        RetryOptions(retries=1.5)


def test_retry_options_negative_delay() -> None:
    with pytest.raises(ValueError, match=r"delay must be >= 0"):
        RetryOptions(delay=-1)


def test_retry_options_replace_is_validated() -> None:
    with pytest.raises(ValueError, match=r"retries must be >= 0"):
        dataclasses.replace(RetryOptions(retries=3), retries=-1)
