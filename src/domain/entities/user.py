"""
User Entity

Represents a Nubo account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class User(SQLModel, table=True):
    """
    User entity - a Nubo account.

    Business Rules:
    - Email must be unique across all users
    - Username is stored lower-cased and must be unique
    - Password stored as bcrypt hash (cost factor 12)
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=50)
    name: str = Field(max_length=100)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
