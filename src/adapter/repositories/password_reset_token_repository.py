from src.adapter.repositories.token_record_repository import TokenRecordRepository
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(TokenRecordRepository, IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    model = PasswordResetToken
