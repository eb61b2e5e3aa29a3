from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.post_repository import IPostRepository
from src.domain.entities import Post


class PostRepository(IPostRepository):
    """Post repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Post]:
        """Get every post"""
        result = await self.session.exec(select(Post))
        return list(result.all())
