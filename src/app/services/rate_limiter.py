"""
Fixed-Window Rate Limiter

Request-count gate keyed by client address, with counters kept in the
shared database so every server instance sees the same window.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now

logger = logging.getLogger(__name__)

ANONYMOUS_CLIENT_KEY = "anonymous"


@dataclass(frozen=True)
class RateLimitPolicy:
    scope: str
    limit: int
    window: timedelta


@dataclass(frozen=True)
class RateLimitDecision:
    success: bool
    limit: int
    remaining: int
    reset: datetime
    retry_after: int  # seconds until the window resets, at least 1


class RateLimiter:
    """
    Fixed-window counter (not sliding): up to 2x limit can pass around a
    window boundary.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def check(self, policy: RateLimitPolicy, client_key: str) -> RateLimitDecision:
        now = self.clock()

        async with self.uow:
            counter = await self.uow.rate_limit_counters.hit(
                policy.scope, client_key, now, policy.window
            )
            await self.uow.commit()

        seconds_left = (counter.window_reset_at - now).total_seconds()
        decision = RateLimitDecision(
            success=counter.count <= policy.limit,
            limit=policy.limit,
            remaining=max(0, policy.limit - counter.count),
            reset=counter.window_reset_at,
            retry_after=max(1, math.ceil(seconds_left)),
        )

        if not decision.success:
            logger.info(
                f"Rate limit exceeded: scope={policy.scope} count={counter.count} "
                f"limit={policy.limit}"
            )

        return decision
