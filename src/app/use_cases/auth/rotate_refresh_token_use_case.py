"""
Rotate Refresh Token Use Case

Trades a refresh cookie for a new session, access token and cookie.
"""

from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.token_lifecycle import TokenLifecycle
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, Session
from .consume_refresh_token_use_case import redeem_refresh_credential
from .dtos import RotateRefreshTokenResult
from .policies import refresh_token_ttl, session_ttl


class RotateRefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Old token is redeemed (single use) before anything is issued
    - A new session and a new 30-day refresh token are created
    - Replaying the old cookie reports TOKEN_ALREADY_USED
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, raw_cookie: Optional[str]) -> Result[RotateRefreshTokenResult]:
        async with self.uow:
            lifecycle = TokenLifecycle(self.uow.refresh_tokens, self.clock)
            redeemed = await redeem_refresh_credential(lifecycle, raw_cookie)
            if redeemed.is_err():
                return Return.err(redeemed.error)

            old_token = redeemed.value

            user = await self.uow.users.get_by_id(old_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            session = Session(
                user_id=user.id,
                expires_at=self.clock() + session_ttl(True),
            )
            session = await self.uow.sessions.create(session)

            ttl = refresh_token_ttl(True)
            issued = await lifecycle.issue(user.id, ttl)

            audit = AuditEvent(
                user_id=user.id,
                action="refresh_token_rotated",
                event_metadata={
                    "old_token_id": str(old_token.id),
                    "new_token_id": str(issued.record.id),
                    "session_id": str(session.id),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                RotateRefreshTokenResult(
                    access_token=generate_jwt(user.id, session.id),
                    session_id=str(session.id),
                    refresh_token=issued.credential,
                    refresh_max_age=int(ttl.total_seconds()),
                )
            )
