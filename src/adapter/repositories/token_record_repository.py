from typing import Optional, Type
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.token_record_repository import ITokenRecordRepository
from src.domain.entities import TokenRecordBase


class TokenRecordRepository(ITokenRecordRepository):
    """Token record repository implementation using SQLModel"""

    model: Type[TokenRecordBase]

    def __init__(self, session: AsyncSession):
        self.session = session

    def new_record(self, **fields) -> TokenRecordBase:
        return self.model(**fields)

    async def create(self, token: TokenRecordBase) -> TokenRecordBase:
        """Insert a new token record"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_id(self, token_id: UUID) -> Optional[TokenRecordBase]:
        """Get token record by ID"""
        stmt = select(self.model).where(self.model.id == token_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_used(self, token_id: UUID) -> bool:
        """
        Compare-and-swap on the used column.

        Concurrent callers race on the row; the store lets exactly one
        update match used == False.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == token_id, self.model.used == False)
            .values(used=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def mark_all_used_by_user_id(self, user_id: UUID) -> int:
        """Mark every outstanding token of a user as used"""
        stmt = (
            update(self.model)
            .where(self.model.user_id == user_id, self.model.used == False)
            .values(used=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
