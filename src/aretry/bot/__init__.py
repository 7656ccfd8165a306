r"""Sample integration: a messaging bot HTTP API client.

The client supplies a rate-limit-aware policy to ``retry_async``: the
wait requested by a rate-limited response is honored, other failures
use a capped exponential backoff.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_URL",
    "BotApiClient",
    "BotApiError",
    "LoggingHooks",
    "RateLimitAwareDelay",
    "is_rate_limit_error",
]

from aretry.bot.client import DEFAULT_BASE_URL, BotApiClient
from aretry.bot.exceptions import BotApiError
from aretry.bot.hooks import LoggingHooks
from aretry.bot.policy import RateLimitAwareDelay, is_rate_limit_error
