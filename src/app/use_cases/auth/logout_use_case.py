"""
Logout Use Case

Ends the current session and retires the user's refresh tokens.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import AuthSession, LogoutResponse


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Current session is revoked
    - Every outstanding refresh token of the user is marked as used
      (tokens are never deleted)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, auth: AuthSession) -> Result[LogoutResponse]:
        async with self.uow:
            await self.uow.sessions.revoke_by_id(auth.session_id)
            revoked = await self.uow.refresh_tokens.mark_all_used_by_user_id(
                auth.user_id
            )

            audit = AuditEvent(
                user_id=auth.user_id,
                action="logout",
                event_metadata={
                    "session_id": str(auth.session_id),
                    "refresh_tokens_revoked": revoked,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                LogoutResponse(status="logged_out", refresh_tokens_revoked=revoked)
            )
