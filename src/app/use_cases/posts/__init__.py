"""
Post Use Cases
"""

from .get_trending_hashtags_use_case import GetTrendingHashtagsUseCase
from .dtos import TrendingHashtag

__all__ = ["GetTrendingHashtagsUseCase", "TrendingHashtag"]
