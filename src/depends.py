from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_sender import LoggingEmailSender, SmtpEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthSession
from src.domain.base import utc_now

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def open_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_unit_of_work_factory():
    """Opens units of work for background tasks, which outlive the request session"""
    return open_unit_of_work


def get_email_sender() -> IEmailSender:
    if ApplicationConfig.SMTP_HOST:
        return SmtpEmailSender(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            sender=ApplicationConfig.EMAIL_FROM,
            username=ApplicationConfig.SMTP_USERNAME,
            password=ApplicationConfig.SMTP_PASSWORD,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
        )
    return LoggingEmailSender()


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuthSession:
    """
    Dependency resolving the caller's session from the Authorization header.

    The access token must verify, and the sessions row it names must
    exist, belong to the token subject, be unrevoked and unexpired.

    Returns:
        AuthSession passed explicitly into the handler

    Raises:
        HTTPException: 401 if token or session is invalid
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
    )

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise unauthorized

    try:
        user_id = UUID(payload["sub"])
        session_id = UUID(payload["session_id"])
    except (KeyError, ValueError):
        raise unauthorized

    async with uow:
        session = await uow.sessions.get_by_id(session_id)

        if (
            session is None
            or session.user_id != user_id
            or session.revoked
            or session.expires_at <= utc_now()
        ):
            raise unauthorized

        return AuthSession(session_id=session.id, user_id=session.user_id)
