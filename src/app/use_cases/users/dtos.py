from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserInfo


class MeResponse(BaseModel):
    """GET /me response payload"""

    user: UserInfo
    session_id: str
