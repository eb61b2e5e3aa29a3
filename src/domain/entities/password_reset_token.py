"""
PasswordResetToken Entity

Secure password reset tokens.
"""

from .token_record import TokenRecordBase


class PasswordResetToken(TokenRecordBase, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Expires after 1 hour
    - Delivered by e-mail as id + secret query parameters
    - Single-use: marked as used on confirmation
    """

    __tablename__ = "password_reset_tokens"
