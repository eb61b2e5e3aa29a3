from pydantic import BaseModel


class TrendingHashtag(BaseModel):
    """One row of the trending list"""

    hashtag: str
    count: int
