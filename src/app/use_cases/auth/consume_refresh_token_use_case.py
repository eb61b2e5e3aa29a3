"""
Consume Refresh Token Use Case

Redeems the refresh cookie once. Opening a new session is left to the
caller.
"""

from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.token_lifecycle import (
    INVALID_TOKEN_FORMAT,
    TokenLifecycle,
    parse_credential,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, TokenRecordBase
from .dtos import ConsumeRefreshTokenResponse

MISSING_REFRESH_TOKEN = "MISSING_REFRESH_TOKEN"


async def redeem_refresh_credential(
    lifecycle: TokenLifecycle, raw: Optional[str]
) -> Result[TokenRecordBase]:
    """Parse "<id>:<secret>" and redeem it"""
    if not raw:
        return Return.err(Error(MISSING_REFRESH_TOKEN, "No refresh cookie"))

    parsed = parse_credential(raw)
    if parsed is None:
        return Return.err(Error(INVALID_TOKEN_FORMAT, "Invalid token format"))

    token_id, secret = parsed
    return await lifecycle.redeem(token_id, secret)


class ConsumeRefreshTokenUseCase:
    """
    Use case for consuming a refresh token.

    Business Rules:
    - Cookie value must split into exactly (uuid, secret)
    - Token is checked for used, expiry and secret, then marked used by a
      conditional update
    - Does not mint a replacement session or token
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, raw_cookie: Optional[str]
    ) -> Result[ConsumeRefreshTokenResponse]:
        async with self.uow:
            lifecycle = TokenLifecycle(self.uow.refresh_tokens, self.clock)
            redeemed = await redeem_refresh_credential(lifecycle, raw_cookie)
            if redeemed.is_err():
                return Return.err(redeemed.error)

            record = redeemed.value

            audit = AuditEvent(
                user_id=record.user_id,
                action="refresh_token_consumed",
                event_metadata={"token_id": str(record.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                ConsumeRefreshTokenResponse(status="ok", user_id=str(record.user_id))
            )
