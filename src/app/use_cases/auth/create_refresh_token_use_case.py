"""
Create Refresh Token Use Case

Issues a refresh token for an already authenticated session.
"""

from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.services.token_lifecycle import TokenLifecycle
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import AuthSession, IssuedRefreshToken
from .policies import refresh_token_ttl


class CreateRefreshTokenUseCase:
    """
    Use case for creating a refresh token.

    Business Rules:
    - Caller must hold a live session (enforced by the API layer)
    - 30 days with "remember me", otherwise 24 hours
    - Cookie max-age equals the token lifetime
    - Other outstanding refresh tokens of the user are left alone
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, auth: AuthSession, remember: bool = False
    ) -> Result[IssuedRefreshToken]:
        ttl = refresh_token_ttl(remember)

        async with self.uow:
            lifecycle = TokenLifecycle(self.uow.refresh_tokens, self.clock)
            issued = await lifecycle.issue(auth.user_id, ttl)

            audit = AuditEvent(
                user_id=auth.user_id,
                action="refresh_token_issued",
                event_metadata={
                    "token_id": str(issued.record.id),
                    "session_id": str(auth.session_id),
                    "remember": remember,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                IssuedRefreshToken(
                    refresh_token=issued.credential,
                    max_age=int(ttl.total_seconds()),
                    expires_at=issued.record.expires_at,
                )
            )
