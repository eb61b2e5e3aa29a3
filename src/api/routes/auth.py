from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Cookie, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.cookies import clear_refresh_cookie, set_refresh_cookie
from src.api.utils.background import issue_password_reset
from src.api.utils.rate_limit import connection_client_key, password_reset_policy, rate_limited
from src.app.services.email_sender import IEmailSender
from src.app.services.token_lifecycle import (
    INVALID_TOKEN_FORMAT,
    TOKEN_ALREADY_USED,
    TOKEN_EXPIRED,
    TOKEN_MISMATCH,
    TOKEN_NOT_FOUND,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthSession,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    LogoutResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    ConfirmPasswordResetResponse,
    CreateRefreshTokenUseCase,
    ConsumeRefreshTokenUseCase,
    ConsumeRefreshTokenResponse,
    RotateRefreshTokenUseCase,
)
from src.app.use_cases.auth.consume_refresh_token_use_case import MISSING_REFRESH_TOKEN
from src.app.use_cases.auth.request_password_reset_use_case import sent_response
from src.depends import (
    get_current_session,
    get_email_sender,
    get_unit_of_work,
    get_unit_of_work_factory,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

TOKEN_ERRORS = (TOKEN_NOT_FOUND, TOKEN_ALREADY_USED, TOKEN_EXPIRED, TOKEN_MISMATCH)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    username: str = Field(..., min_length=1, max_length=50, description="Unique handle")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Register

    Raises:
        - 400 Bad Request: Blank username
        - 409 Conflict: Email or username already in use
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        name=request.name,
        username=request.username,
        email=request.email,
        password=request.password,
    )

    result = await RegisterUseCase(uow).execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_ALREADY_EXISTS", "USERNAME_TAKEN"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_USERNAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    remember: bool = Field(False, description="Keep the session for 30 days")


class AccessTokenResponse(BaseModel):
    """Access token body; the refresh token travels in the cookie"""

    access_token: str
    session_id: str


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Opens a server-side session, returns a short-lived access token and
    sets the refresh cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    result = await LoginUseCase(uow).execute(
        request.email, request.password, request.remember
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    data = result.value
    set_refresh_cookie(response, data.refresh_token, data.refresh_max_age)
    return AccessTokenResponse(access_token=data.access_token, session_id=data.session_id)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    auth: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the current session, retires the user's refresh tokens and
    clears the cookie.
    """
    result = await LogoutUseCase(uow).execute(auth)

    if result.is_err():
        raise ServerError(result.error)

    clear_refresh_cookie(response)
    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(rate_limited(password_reset_policy, key=connection_client_key))],
)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    open_unit_of_work=Depends(get_unit_of_work_factory),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Issues a 1-hour reset token and e-mails the link.

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Account lookup, token issuance and delivery run after the response
        - Rate limited per connecting address

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 429 Too Many Requests: Rate limit exceeded
    """
    background_tasks.add_task(
        issue_password_reset, open_unit_of_work, email_sender, request.email
    )
    return sent_response()


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload (values from the e-mailed link)"""

    id: UUID = Field(..., description="Password reset token id")
    token: str = Field(..., min_length=1, description="Password reset secret")
    new_password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset

    Validates and consumes the reset token, updates the password and
    revokes all sessions of the account.

    Raises:
        - 400 Bad Request: Invalid, expired or used token; weak password
    """
    result = await ConfirmPasswordResetUseCase(uow).execute(
        request.id, request.token, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in TOKEN_ERRORS or error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class CreateRefreshRequest(BaseModel):
    """Create refresh token HTTP request payload"""

    remember: bool = Field(False, description="30-day token instead of 24 hours")


class RefreshCreatedResponse(BaseModel):
    status: str


@router.post(
    "/refresh/create",
    status_code=status.HTTP_200_OK,
    response_model=RefreshCreatedResponse,
)
async def create_refresh_token(
    response: Response,
    request: Optional[CreateRefreshRequest] = None,
    auth: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Refresh Token

    Requires an authenticated session. Sets the refresh cookie with a
    max-age matching the token lifetime.
    """
    remember = request.remember if request else False
    result = await CreateRefreshTokenUseCase(uow).execute(auth, remember)

    if result.is_err():
        raise ServerError(result.error)

    data = result.value
    set_refresh_cookie(response, data.refresh_token, data.max_age)
    return RefreshCreatedResponse(status="ok")


def raise_refresh_error(error) -> None:
    if error.code == INVALID_TOKEN_FORMAT:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code in TOKEN_ERRORS or error.code in (
        MISSING_REFRESH_TOKEN,
        "USER_NOT_FOUND",
    ):
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    raise ServerError(error)


@router.post(
    "/refresh/consume",
    status_code=status.HTTP_200_OK,
    response_model=ConsumeRefreshTokenResponse,
)
async def consume_refresh_token(
    refresh_cookie: Optional[str] = Cookie(
        default=None, alias=ApplicationConfig.REFRESH_COOKIE_NAME
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Consume Refresh Token

    Redeems the refresh cookie once. The client then opens a new session
    through /auth/login or /auth/refresh.

    Raises:
        - 400 Bad Request: Cookie is not "<id>:<secret>"
        - 401 Unauthorized: Missing cookie; unknown, used, expired or
          mismatched token
    """
    result = await ConsumeRefreshTokenUseCase(uow).execute(refresh_cookie)

    if result.is_err():
        raise_refresh_error(result.error)

    return result.value


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def rotate_refresh_token(
    response: Response,
    refresh_cookie: Optional[str] = Cookie(
        default=None, alias=ApplicationConfig.REFRESH_COOKIE_NAME
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Refresh Session

    Redeems the refresh cookie, opens a new session and rotates the
    cookie. Replaying an old cookie fails with TOKEN_ALREADY_USED.
    """
    result = await RotateRefreshTokenUseCase(uow).execute(refresh_cookie)

    if result.is_err():
        raise_refresh_error(result.error)

    data = result.value
    set_refresh_cookie(response, data.refresh_token, data.refresh_max_age)
    return AccessTokenResponse(access_token=data.access_token, session_id=data.session_id)
