"""
TokenRecord Base

Shared shape of single-use credential tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import DateTime, Field, SQLModel

from src.domain.base import utc_now


class TokenRecordBase(SQLModel):
    """
    Fields common to password reset and refresh tokens.

    Business Rules:
    - token_hash is the SHA-256 hex digest of the opaque secret
    - The raw secret is never persisted
    - used moves false -> true once and never back
    - Consumable iff not used, not expired and the hash matches
    - Rows are never deleted; expiry is logical
    """

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=64)  # SHA-256 hex output

    used: bool = Field(default=False, index=True)

    # Timestamps
    expires_at: datetime = Field(index=True, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
