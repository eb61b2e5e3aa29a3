"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

from datetime import datetime
from typing import Callable
from urllib.parse import urlencode

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.token_lifecycle import IssuedToken, TokenLifecycle
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import RequestPasswordResetResponse
from .policies import reset_token_ttl

GENERIC_MESSAGE = "If the email exists, a password reset link has been sent"


def sent_response() -> RequestPasswordResetResponse:
    return RequestPasswordResetResponse(status="sent", message=GENERIC_MESSAGE)


def build_reset_url(issued: IssuedToken) -> str:
    query = urlencode({"id": str(issued.record.id), "token": issued.secret})
    return f"{ApplicationConfig.APP_BASE_URL}/reset-password?{query}"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - 32-byte random secret, stored only as its SHA-256 digest
    - Token expires in 1 hour
    - No email enumeration (same response for valid/invalid emails)
    - Outstanding tokens of the same user stay valid; each request adds one
    - The link carries both the record id and the secret
    - Audit event created for security tracking
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.clock = clock

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic "sent" response

        Note:
            Always returns success; a token is only created and mailed
            when the email belongs to an account.
        """
        generic = sent_response()

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.ok(generic)

            lifecycle = TokenLifecycle(self.uow.password_reset_tokens, self.clock)
            issued = await lifecycle.issue(user.id, reset_token_ttl())

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_requested",
                event_metadata={"token_id": str(issued.record.id)},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            reset_url = build_reset_url(issued)

        await self.email_sender.send_password_reset(email, reset_url)

        return Return.ok(generic)
