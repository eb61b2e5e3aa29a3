"""
RefreshToken Entity

Long-lived tokens stored in the refresh cookie.
"""

from .token_record import TokenRecordBase


class RefreshToken(TokenRecordBase, table=True):
    """
    RefreshToken entity - cookie-borne tokens used to reopen a session.

    Business Rules:
    - Cookie value is "<id>:<secret>"
    - Expires after 24 hours, or 30 days when "remember me" is set
    - Single-use: consuming or rotating marks it as used
    """

    __tablename__ = "refresh_tokens"
