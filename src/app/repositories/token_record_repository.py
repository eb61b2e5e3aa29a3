from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import TokenRecordBase


class ITokenRecordRepository(ABC):
    """
    Credential token store interface - application layer

    Shared by password reset and refresh tokens. Owns id uniqueness and
    the conditional used-flag transition.
    """

    @abstractmethod
    def new_record(self, **fields) -> TokenRecordBase:
        """Build an unsaved record of the concrete token type"""
        pass

    @abstractmethod
    async def create(self, token: TokenRecordBase) -> TokenRecordBase:
        """Insert a new token record"""
        pass

    @abstractmethod
    async def get_by_id(self, token_id: UUID) -> Optional[TokenRecordBase]:
        """Get token record by ID"""
        pass

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> bool:
        """
        Set used=True where id matches and used is still False.

        Returns True only for the caller whose update flipped the flag.
        """
        pass

    @abstractmethod
    async def mark_all_used_by_user_id(self, user_id: UUID) -> int:
        """Mark every outstanding token of a user as used. Returns count."""
        pass
