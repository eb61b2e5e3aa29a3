"""
RateLimitCounter Entity

Fixed-window request counters shared by every server instance.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import DateTime, Field, SQLModel


class RateLimitCounter(SQLModel, table=True):
    """
    RateLimitCounter entity - one row per (scope, client_key).

    Business Rules:
    - count restarts at 1 when now >= window_reset_at
    - The boundary tick belongs to the new window
    - Reset and increment are conditional updates, never read-then-write
    """

    __tablename__ = "rate_limit_counters"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    scope: str = Field(max_length=64)
    client_key: str = Field(max_length=255)

    count: int = Field(default=0)
    window_reset_at: datetime = Field(sa_type=DateTime)

    __table_args__ = (
        UniqueConstraint("scope", "client_key", name="uq_rate_limit_scope_key"),
    )
