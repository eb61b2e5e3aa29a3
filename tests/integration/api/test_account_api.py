"""
Integration tests for register / login / logout / me / health
"""
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import RefreshToken, Session, User
from tests.integration.helpers import (
    bearer,
    cookie_headers,
    create_user,
    login,
    refresh_cookie,
    set_cookie_header,
)


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_register(client: AsyncClient, db_session: AsyncSession):
    response = await client.post(
        "/auth/register",
        json={
            "name": "Ada Lovelace",
            "username": "Ada",
            "email": "ada@example.com",
            "password": "SecurePass123",
        },
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["username"] == "ada"
    assert user["email"] == "ada@example.com"
    assert "password" not in str(response.json())

    db_session.expire_all()
    stored = (await db_session.exec(select(User))).one()
    assert stored.password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_register_duplicate_email_and_username(
    client: AsyncClient, db_session: AsyncSession
):
    await create_user(db_session, email="taken@example.com", username="taken")

    same_email = await client.post(
        "/auth/register",
        json={
            "name": "X",
            "username": "fresh",
            "email": "taken@example.com",
            "password": "SecurePass123",
        },
    )
    same_username = await client.post(
        "/auth/register",
        json={
            "name": "X",
            "username": "TAKEN",
            "email": "fresh@example.com",
            "password": "SecurePass123",
        },
    )

    assert same_email.status_code == 409
    assert same_email.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"
    assert same_username.status_code == 409
    assert same_username.json()["error"]["code"] == "USERNAME_TAKEN"


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={"name": "X", "username": "x", "email": "x@example.com", "password": "short"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_sets_cookie_and_opens_session(
    client: AsyncClient, db_session: AsyncSession
):
    await create_user(db_session, email="login@example.com")

    response = await login(client, "login@example.com")

    data = response.json()
    assert data["access_token"]
    assert data["session_id"]
    assert "refresh_token" not in data
    assert refresh_cookie(response)
    assert "max-age=86400" in set_cookie_header(response).lower()

    me = await client.get("/me", headers=bearer(data["access_token"]))
    assert me.status_code == 200
    body = me.json()
    assert body["user"]["email"] == "login@example.com"
    assert body["session_id"] == data["session_id"]


@pytest.mark.asyncio
async def test_login_remember_me(client: AsyncClient, db_session: AsyncSession):
    await create_user(db_session, email="remember@example.com")

    response = await login(client, "remember@example.com", remember=True)

    assert "max-age=2592000" in set_cookie_header(response).lower()


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, db_session: AsyncSession):
    await create_user(db_session, email="login@example.com")

    wrong_password = await client.post(
        "/auth/login", json={"email": "login@example.com", "password": "WrongPass1"}
    )
    unknown_email = await client.post(
        "/auth/login", json={"email": "nobody@example.com", "password": "WrongPass1"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/me", headers=bearer("not-a-jwt"))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_session_and_refresh_tokens(
    client: AsyncClient, db_session: AsyncSession
):
    await create_user(db_session, email="bye@example.com")
    login_response = await login(client, "bye@example.com")
    access_token = login_response.json()["access_token"]
    cookie = refresh_cookie(login_response)
    client.cookies.clear()

    response = await client.post("/auth/logout", headers=bearer(access_token))

    assert response.status_code == 200
    assert response.json()["status"] == "logged_out"
    assert response.json()["refresh_tokens_revoked"] == 1
    cleared = set_cookie_header(response)
    assert cleared is not None
    assert "max-age=0" in cleared.lower()

    db_session.expire_all()
    session = (await db_session.exec(select(Session))).one()
    assert session.revoked is True
    assert session.revoked_at is not None
    token = (await db_session.exec(select(RefreshToken))).one()
    assert token.used is True

    me = await client.get("/me", headers=bearer(access_token))
    assert me.status_code == 401

    consume = await client.post("/auth/refresh/consume", headers=cookie_headers(cookie))
    assert consume.status_code == 401
    assert consume.json()["error"]["code"] == "TOKEN_ALREADY_USED"
