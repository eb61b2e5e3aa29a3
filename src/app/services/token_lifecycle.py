"""
Credential Token Lifecycle

Issue, validate and consume single-use tokens (password reset, refresh).
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.token_record_repository import ITokenRecordRepository
from src.domain.base import utc_now
from src.domain.entities import TokenRecordBase

SECRET_BYTES = 32
CREDENTIAL_SEPARATOR = ":"

TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
TOKEN_ALREADY_USED = "TOKEN_ALREADY_USED"
TOKEN_EXPIRED = "TOKEN_EXPIRED"
TOKEN_MISMATCH = "TOKEN_MISMATCH"
INVALID_TOKEN_FORMAT = "INVALID_TOKEN_FORMAT"


def hash_secret(secret: str) -> str:
    """SHA-256 hex digest of an opaque secret"""
    return hashlib.sha256(secret.encode()).hexdigest()


def parse_credential(raw: str) -> Optional[Tuple[UUID, str]]:
    """
    Split "<id>:<secret>" into its parts.

    Returns None when the value is not exactly two non-empty parts or the
    id is not a UUID.
    """
    parts = raw.split(CREDENTIAL_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    try:
        return UUID(parts[0]), parts[1]
    except ValueError:
        return None


@dataclass(frozen=True)
class IssuedToken:
    record: TokenRecordBase
    secret: str

    @property
    def credential(self) -> str:
        """Externally transported form: cookie value or link parameters"""
        return f"{self.record.id}{CREDENTIAL_SEPARATOR}{self.secret}"


class TokenLifecycle:
    """
    Token issuer, validator and consumer over one token store.

    Business Rules:
    - Secrets are 32 random bytes, hex encoded, never stored or logged
    - Only the SHA-256 digest is persisted
    - used=True is terminal, checked before expiry and secret
    - Consumption is a conditional update (used=False -> True), so two
      concurrent redemptions cannot both succeed
    - Nothing here commits; the caller's unit of work owns the transaction
    """

    def __init__(
        self,
        tokens: ITokenRecordRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.tokens = tokens
        self.clock = clock

    async def issue(self, user_id: UUID, ttl: timedelta) -> IssuedToken:
        """Persist a fresh record and hand back the raw secret once"""
        secret = secrets.token_hex(SECRET_BYTES)
        record = self.tokens.new_record(
            user_id=user_id,
            token_hash=hash_secret(secret),
            used=False,
            expires_at=self.clock() + ttl,
        )
        record = await self.tokens.create(record)
        return IssuedToken(record=record, secret=secret)

    async def validate(self, token_id: UUID, secret: str) -> Result[TokenRecordBase]:
        record = await self.tokens.get_by_id(token_id)
        if record is None:
            return Return.err(Error(TOKEN_NOT_FOUND, "Invalid or expired token"))

        if record.used:
            return Return.err(Error(TOKEN_ALREADY_USED, "Token already used"))

        if self.clock() >= record.expires_at:
            return Return.err(Error(TOKEN_EXPIRED, "Token expired"))

        if not hmac.compare_digest(hash_secret(secret), record.token_hash):
            return Return.err(Error(TOKEN_MISMATCH, "Invalid token"))

        return Return.ok(record)

    async def consume(self, token_id: UUID) -> Result[None]:
        if not await self.tokens.mark_used(token_id):
            return Return.err(Error(TOKEN_ALREADY_USED, "Token already used"))
        return Return.ok(None)

    async def redeem(self, token_id: UUID, secret: str) -> Result[TokenRecordBase]:
        """Validate, then consume; side effects belong after an ok result"""
        validation = await self.validate(token_id, secret)
        if validation.is_err():
            return validation

        consumed = await self.consume(token_id)
        if consumed.is_err():
            return Return.err(consumed.error)

        return validation
