"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .create_refresh_token_use_case import CreateRefreshTokenUseCase
from .consume_refresh_token_use_case import ConsumeRefreshTokenUseCase
from .rotate_refresh_token_use_case import RotateRefreshTokenUseCase
from .dtos import (
    AuthSession,
    RegisterCommand,
    RegisterResponse,
    UserInfo,
    LoginResult,
    LogoutResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
    IssuedRefreshToken,
    ConsumeRefreshTokenResponse,
    RotateRefreshTokenResult,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "CreateRefreshTokenUseCase",
    "ConsumeRefreshTokenUseCase",
    "RotateRefreshTokenUseCase",
    # DTOs - Context and Commands
    "AuthSession",
    "RegisterCommand",
    # DTOs - Results and Responses
    "RegisterResponse",
    "LoginResult",
    "LogoutResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
    "IssuedRefreshToken",
    "ConsumeRefreshTokenResponse",
    "RotateRefreshTokenResult",
    # DTOs - Nested Models
    "UserInfo",
]
