"""
Post Entity

Read-only view of posts used for hashtag trends.
"""

from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class Post(SQLModel, table=True):
    """
    Post entity - only the columns the trending aggregation reads.

    hashtags may be empty on older rows; content is scanned instead.
    """

    __tablename__ = "posts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    author_id: UUID = Field(foreign_key="users.id", index=True)

    content: str = Field(default="")
    hashtags: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
