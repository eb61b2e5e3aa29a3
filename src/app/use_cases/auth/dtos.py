"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command, Result and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Session context
# ============================================================================


class AuthSession(BaseModel):
    """
    Authenticated session handed to a handler explicitly.

    Built by the API layer from a verified access token and a live
    sessions row; use cases never look up the caller on their own.
    """

    session_id: UUID
    user_id: UUID


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Register command - validated sign-up intent"""

    name: str
    username: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user information"""

    id: str
    email: str
    username: str
    name: str


class RegisterResponse(BaseModel):
    """Response for register use case"""

    user: UserInfo


class LoginResult(BaseModel):
    """
    Result of login use case.

    refresh_token is the "<id>:<secret>" cookie value; the API layer
    moves it into a cookie and keeps it out of the JSON body.
    """

    access_token: str
    session_id: str
    refresh_token: str
    refresh_max_age: int


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str
    refresh_tokens_revoked: int


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str


class IssuedRefreshToken(BaseModel):
    """Result of create refresh token use case"""

    refresh_token: str
    max_age: int
    expires_at: datetime


class ConsumeRefreshTokenResponse(BaseModel):
    """Response for consume refresh token use case"""

    status: str
    user_id: str


class RotateRefreshTokenResult(BaseModel):
    """Result of refresh token rotation (new session, new cookie)"""

    access_token: str
    session_id: str
    refresh_token: str
    refresh_max_age: int
