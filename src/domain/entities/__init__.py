"""
Nubo Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import RateLimitScope

# Export all entities
from .user import User
from .session import Session
from .token_record import TokenRecordBase
from .password_reset_token import PasswordResetToken
from .refresh_token import RefreshToken
from .rate_limit_counter import RateLimitCounter
from .post import Post
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "RateLimitScope",
    # Entities
    "User",
    "Session",
    "TokenRecordBase",
    "PasswordResetToken",
    "RefreshToken",
    "RateLimitCounter",
    "Post",
    "AuditEvent",
]
