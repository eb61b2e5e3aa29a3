from src.app.repositories.token_record_repository import ITokenRecordRepository


class IRefreshTokenRepository(ITokenRecordRepository):
    """RefreshToken repository interface - application layer"""
