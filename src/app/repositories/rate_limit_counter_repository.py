from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from src.domain.entities import RateLimitCounter


class IRateLimitCounterRepository(ABC):
    """RateLimitCounter repository interface - application layer"""

    @abstractmethod
    async def hit(
        self, scope: str, client_key: str, now: datetime, window: timedelta
    ) -> RateLimitCounter:
        """
        Count one request for (scope, client_key) and return the counter.

        Starts a new window (count=1, window_reset_at=now+window) when
        now >= window_reset_at or no counter exists; otherwise increments.
        """
        pass
