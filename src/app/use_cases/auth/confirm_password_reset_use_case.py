"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

from datetime import datetime
from typing import Callable
from uuid import UUID

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.token_lifecycle import TokenLifecycle
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import ConfirmPasswordResetResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is looked up by id, then checked for used, expiry and secret
    - The used flag flips through a conditional update before anything
      else changes; a lost race reports TOKEN_ALREADY_USED
    - New password must be at least 8 characters
    - Password is hashed with bcrypt (cost factor 12)
    - All user sessions are revoked and refresh tokens retired
    - Audit event created for security tracking
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < 8:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    "Password must be at least 8 characters long",
                )
            )
        return Return.ok(None)

    async def execute(
        self, token_id: UUID, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token_id: Password reset record id (from the link)
            token: Plain secret (from the link)
            new_password: New password to set

        Errors:
            - INVALID_PASSWORD: Password does not meet requirements
            - TOKEN_NOT_FOUND: No such token
            - TOKEN_ALREADY_USED: Token has already been used
            - TOKEN_EXPIRED: Token has expired
            - TOKEN_MISMATCH: Secret does not match
            - USER_NOT_FOUND: Token owner no longer exists
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            lifecycle = TokenLifecycle(self.uow.password_reset_tokens, self.clock)
            redeemed = await lifecycle.redeem(token_id, token)
            if redeemed.is_err():
                return Return.err(redeemed.error)

            reset_token = redeemed.value

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            user.password_hash = password_hash.decode()
            await self.uow.users.update(user)

            sessions_revoked = await self.uow.sessions.revoke_all_by_user_id(user.id)
            refresh_tokens_revoked = (
                await self.uow.refresh_tokens.mark_all_used_by_user_id(user.id)
            )

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_confirmed",
                event_metadata={
                    "token_id": str(reset_token.id),
                    "sessions_revoked": sessions_revoked,
                    "refresh_tokens_revoked": refresh_tokens_revoked,
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
