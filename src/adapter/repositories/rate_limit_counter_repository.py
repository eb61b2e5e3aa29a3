from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.rate_limit_counter_repository import IRateLimitCounterRepository
from src.domain.entities import RateLimitCounter


class RateLimitCounterRepository(IRateLimitCounterRepository):
    """RateLimitCounter repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def hit(
        self, scope: str, client_key: str, now: datetime, window: timedelta
    ) -> RateLimitCounter:
        """
        Count one request with conditional updates only.

        1. expired window -> restart at 1 (now == window_reset_at is expired)
        2. live window -> count + 1
        3. no row -> insert; losing an insert race falls back to step 2
        """
        matches_key = (
            RateLimitCounter.scope == scope,
            RateLimitCounter.client_key == client_key,
        )

        restart = (
            update(RateLimitCounter)
            .where(*matches_key, RateLimitCounter.window_reset_at <= now)
            .values(count=1, window_reset_at=now + window)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(restart)

        if result.rowcount == 0:
            result = await self.session.execute(self._increment(matches_key, now))

        if result.rowcount == 0:
            try:
                async with self.session.begin_nested():
                    self.session.add(
                        RateLimitCounter(
                            scope=scope,
                            client_key=client_key,
                            count=1,
                            window_reset_at=now + window,
                        )
                    )
            except IntegrityError:
                # Another request created the row first
                await self.session.execute(self._increment(matches_key, now))

        await self.session.flush()

        stmt = (
            select(RateLimitCounter)
            .where(*matches_key)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one()

    @staticmethod
    def _increment(matches_key, now: datetime):
        return (
            update(RateLimitCounter)
            .where(*matches_key, RateLimitCounter.window_reset_at > now)
            .values(count=RateLimitCounter.count + 1)
            .execution_options(synchronize_session=False)
        )
