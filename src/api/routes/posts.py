from typing import List

from fastapi import APIRouter, Depends, Response, status

from src.api.error import ServerError
from src.api.utils.rate_limit import rate_limited, trending_policy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.posts import GetTrendingHashtagsUseCase, TrendingHashtag
from src.depends import get_unit_of_work

router = APIRouter(prefix="/posts", tags=["Posts"])

TRENDING_CACHE_CONTROL = "s-maxage=60, stale-while-revalidate=300"


@router.get(
    "/trending",
    status_code=status.HTTP_200_OK,
    response_model=List[TrendingHashtag],
    dependencies=[Depends(rate_limited(trending_policy))],
)
async def get_trending(response: Response, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Trending Hashtags

    Top 10 hashtags across all posts, cacheable at the edge for 60s.

    Raises:
        - 429 Too Many Requests: Rate limit exceeded (Retry-After set)
    """
    result = await GetTrendingHashtagsUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    response.headers["Cache-Control"] = TRENDING_CACHE_CONTROL
    return result.value
