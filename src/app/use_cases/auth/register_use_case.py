"""
Register Use Case

Creates a Nubo account.
"""

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, User
from .dtos import RegisterCommand, RegisterResponse, UserInfo


class RegisterUseCase:
    """
    Use case for account registration.

    Business Rules:
    - Username is trimmed and lower-cased before any lookup
    - Email and username must both be unused
    - Password is hashed with bcrypt (cost factor 12)
    - Audit event created for security tracking
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case.

        Returns:
            Result[RegisterResponse], or Error(INVALID_USERNAME,
            EMAIL_ALREADY_EXISTS, USERNAME_TAKEN)
        """
        username = command.username.strip().lower()
        if not username:
            return Return.err(Error("INVALID_USERNAME", "Username cannot be empty"))

        async with self.uow:
            if await self.uow.users.get_by_email(command.email):
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            if await self.uow.users.get_by_username(username):
                return Return.err(Error("USERNAME_TAKEN", "Username is already taken"))

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                email=command.email,
                username=username,
                name=command.name,
                password_hash=password_hash.decode("utf-8"),
            )
            user = await self.uow.users.create(user)

            audit_event = AuditEvent(
                user_id=user.id,
                action="register",
                event_metadata={"username": username},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                RegisterResponse(
                    user=UserInfo(
                        id=str(user.id),
                        email=user.email,
                        username=user.username,
                        name=user.name,
                    )
                )
            )
