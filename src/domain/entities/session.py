"""
Session Entity

Server-side authenticated sessions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - one row per signed-in browser.

    Business Rules:
    - Access tokens carry the session id and die with the session
    - Revoked sessions are rejected by every authenticated endpoint
    - A password reset revokes all sessions of the account
    - Expires after 24 hours, or 30 days when "remember me" is set
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "revoked"),
    )
