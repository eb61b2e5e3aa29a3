"""
Get Trending Hashtags Use Case

Counts hashtags across posts and returns the most used ones.
"""

import re
from collections import Counter
from typing import Iterable, List

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Post
from .dtos import TrendingHashtag

CONTENT_HASHTAG = re.compile(r"#(\w+)", re.ASCII)


def normalize_hashtag(raw: str) -> str:
    tag = str(raw)
    if tag.startswith("#"):
        tag = tag[1:]
    return tag.strip().lower()


def post_hashtags(post: Post) -> Iterable[str]:
    """Stored hashtags when the post has any, otherwise those found in content"""
    if post.hashtags:
        return (normalize_hashtag(raw) for raw in post.hashtags if raw is not None)
    return (match.strip().lower() for match in CONTENT_HASHTAG.findall(post.content or ""))


class GetTrendingHashtagsUseCase:
    """
    Use case for trending hashtags.

    Business Rules:
    - Hashtags are compared lower-cased, without the leading '#'
    - Ties keep first-seen order
    - Top 10 by count
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, limit: int = 10) -> Result[List[TrendingHashtag]]:
        counter: Counter = Counter()
        async with self.uow:
            for post in await self.uow.posts.list_all():
                counter.update(tag for tag in post_hashtags(post) if tag)

        return Return.ok(
            [
                TrendingHashtag(hashtag=hashtag, count=count)
                for hashtag, count in counter.most_common(limit)
            ]
        )
