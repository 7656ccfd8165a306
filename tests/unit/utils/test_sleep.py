r"""Unit tests for sleep time calculation."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from aretry.backoff import ConstantBackoff, LinearBackoff
from aretry.utils.sleep import calculate_sleep_time


@pytest.mark.parametrize(("attempt", "expected"), [(0, 0.3), (1, 0.6), (2, 1.2)])
def test_calculate_sleep_time_default_backoff(attempt: int, expected: float) -> None:
    assert calculate_sleep_time(attempt) == expected


def test_calculate_sleep_time_custom_strategy() -> None:
    assert calculate_sleep_time(2, backoff_strategy=LinearBackoff(base_delay=2.0)) == 6.0


def test_calculate_sleep_time_retry_after_takes_precedence() -> None:
    assert calculate_sleep_time(5, retry_after=3.0, backoff_strategy=ConstantBackoff(10.0)) == 3.0


def test_calculate_sleep_time_zero_retry_after() -> None:
    assert calculate_sleep_time(5, retry_after=0.0) == 0.0


def test_calculate_sleep_time_max_wait_time_caps_backoff() -> None:
    assert calculate_sleep_time(10, max_wait_time=5.0) == 5.0


def test_calculate_sleep_time_max_wait_time_caps_retry_after() -> None:
    assert calculate_sleep_time(0, retry_after=60.0, max_wait_time=10.0) == 10.0


def test_calculate_sleep_time_with_jitter() -> None:
    with patch("aretry.utils.sleep.random.uniform", return_value=0.05) as mock_uniform:
        sleep_time = calculate_sleep_time(0, jitter_factor=0.1, backoff_strategy=ConstantBackoff(2.0))
    mock_uniform.assert_called_once_with(0, 0.1)
    assert sleep_time == pytest.approx(2.1)


def test_calculate_sleep_time_jitter_bounds() -> None:
    for _ in range(50):
        sleep_time = calculate_sleep_time(0, jitter_factor=0.5, backoff_strategy=ConstantBackoff(1.0))
        assert 1.0 <= sleep_time <= 1.5
