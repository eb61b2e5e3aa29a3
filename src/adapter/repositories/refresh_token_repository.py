from src.adapter.repositories.token_record_repository import TokenRecordRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.entities import RefreshToken


class RefreshTokenRepository(TokenRecordRepository, IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    model = RefreshToken
