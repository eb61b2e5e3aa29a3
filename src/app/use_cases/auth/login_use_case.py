"""
Login Use Case

Handles credential checks, opens a session and issues the refresh cookie.
"""

from datetime import datetime
from typing import Callable

import bcrypt

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.token_lifecycle import TokenLifecycle
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, Session
from .dtos import LoginResult
from .policies import refresh_token_ttl, session_ttl


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password give the same error
    - Creates a server-side session and a refresh token with matching
      lifetimes (24 hours, or 30 days with "remember me")
    - Access token is a short-lived JWT bound to the session
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, email: str, password: str, remember: bool = False
    ) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            remember: Extend session and refresh token to 30 days

        Returns:
            Result with LoginResult, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            # Always perform a hash check even if user not found
            if user is None:
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            session = Session(
                user_id=user.id,
                expires_at=self.clock() + session_ttl(remember),
            )
            session = await self.uow.sessions.create(session)

            ttl = refresh_token_ttl(remember)
            issued = await TokenLifecycle(self.uow.refresh_tokens, self.clock).issue(
                user.id, ttl
            )

            audit = AuditEvent(
                user_id=user.id,
                action="login",
                event_metadata={
                    "session_id": str(session.id),
                    "refresh_token_id": str(issued.record.id),
                    "remember": remember,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                LoginResult(
                    access_token=generate_jwt(user.id, session.id),
                    session_id=str(session.id),
                    refresh_token=issued.credential,
                    refresh_max_age=int(ttl.total_seconds()),
                )
            )
