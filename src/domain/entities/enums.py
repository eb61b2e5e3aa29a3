"""
Nubo Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class RateLimitScope(str, Enum):
    """Named rate limit policies"""

    trending = "trending"
    password_reset = "password_reset"
