"""
Load Me Use Case

Returns the account behind the caller's session.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AuthSession, UserInfo
from .dtos import MeResponse


class LoadMeUseCase:
    """Use case for GET /me"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, auth: AuthSession) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(auth.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                MeResponse(
                    user=UserInfo(
                        id=str(user.id),
                        email=user.email,
                        username=user.username,
                        name=user.name,
                    ),
                    session_id=str(auth.session_id),
                )
            )
