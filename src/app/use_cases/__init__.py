"""
Use Cases

Organized into domain folders:
- auth/: Credential flows (login, password reset, refresh tokens)
- users/: Current user
- posts/: Trending hashtags

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    CreateRefreshTokenUseCase,
    ConsumeRefreshTokenUseCase,
    RotateRefreshTokenUseCase,
)
from .users import LoadMeUseCase
from .posts import GetTrendingHashtagsUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "CreateRefreshTokenUseCase",
    "ConsumeRefreshTokenUseCase",
    "RotateRefreshTokenUseCase",
    # Users
    "LoadMeUseCase",
    # Posts
    "GetTrendingHashtagsUseCase",
]
