from src.app.repositories.token_record_repository import ITokenRecordRepository


class IPasswordResetTokenRepository(ITokenRecordRepository):
    """PasswordResetToken repository interface - application layer"""
