from datetime import timedelta
from typing import Optional

import bcrypt
from httpx import AsyncClient, Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.domain.base import utc_now
from src.domain.entities import Session, User

DEFAULT_PASSWORD = "OldPass123!"


async def create_user(
    db_session: AsyncSession,
    email: str = "test@example.com",
    username: str = "tester",
    password: str = DEFAULT_PASSWORD,
) -> User:
    password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(4))
    user = User(
        email=email,
        username=username,
        name="Test User",
        password_hash=password_hash.decode(),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def create_session(db_session: AsyncSession, user_id) -> Session:
    session = Session(user_id=user_id, expires_at=utc_now() + timedelta(days=1))
    db_session.add(session)
    await db_session.commit()
    await db_session.refresh(session)
    return session


def set_cookie_header(response: Response) -> Optional[str]:
    """Raw Set-Cookie header for the refresh cookie, if the response set one"""
    prefix = f"{ApplicationConfig.REFRESH_COOKIE_NAME}="
    for header in response.headers.get_list("set-cookie"):
        if header.startswith(prefix):
            return header
    return None


def refresh_cookie(response: Response) -> Optional[str]:
    header = set_cookie_header(response)
    if header is None:
        return None
    prefix = f"{ApplicationConfig.REFRESH_COOKIE_NAME}="
    return header[len(prefix):].split(";")[0].strip('"')


def cookie_headers(value: str) -> dict:
    return {"Cookie": f"{ApplicationConfig.REFRESH_COOKIE_NAME}={value}"}


def bearer(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


async def login(
    client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD, **extra
) -> Response:
    response = await client.post(
        "/auth/login", json={"email": email, "password": password, **extra}
    )
    assert response.status_code == 200, response.text
    return response
