from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import Post


class IPostRepository(ABC):
    """Post repository interface - application layer"""

    @abstractmethod
    async def list_all(self) -> List[Post]:
        """Get every post (hashtags and content are what callers read)"""
        pass
