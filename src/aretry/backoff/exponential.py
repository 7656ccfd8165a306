r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aretry.backoff.base import BaseBackoffStrategy


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (factor ** attempt), with optional
    max_delay cap.

    Args:
        base_delay: The delay before the first retry (default: 0.3).
        factor: The growth factor between consecutive retries (default: 2.0).
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=1.0)
        >>> backoff.calculate(0)
        1.0
        >>> backoff.calculate(3)
        8.0
        >>> ExponentialBackoff(base_delay=1.0, factor=3.0).calculate(2)
        9.0
        >>> # With max_delay cap
        >>> ExponentialBackoff(base_delay=1.0, max_delay=30.0).calculate(10)
        30.0

        ```
    """

    def __init__(
        self,
        base_delay: float = 0.3,
        factor: float = 2.0,
        max_delay: float | None = None,
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if factor < 1:
            msg = f"factor must be >= 1, got {factor}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.factor = factor
        self.max_delay = max_delay

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The retry number (0-indexed).

        Returns:
            base_delay * (factor ** attempt), capped at max_delay if set.
        """
        if self.max_delay is not None and self.base_delay > 0:
            # Stop growing once the cap is reached to avoid float overflow
            delay = self.base_delay
            for _ in range(attempt):
                delay *= self.factor
                if delay >= self.max_delay:
                    return self.max_delay
            return min(delay, self.max_delay)
        return self.base_delay * (self.factor**attempt)
