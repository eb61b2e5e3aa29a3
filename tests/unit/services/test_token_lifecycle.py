"""
Unit tests for TokenLifecycle

Issue, validate, consume and redeem against a mocked token store.
"""
import hashlib
from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.token_lifecycle import (
    TOKEN_ALREADY_USED,
    TOKEN_EXPIRED,
    TOKEN_MISMATCH,
    TOKEN_NOT_FOUND,
    TokenLifecycle,
    hash_secret,
    parse_credential,
)
from src.domain.entities import PasswordResetToken


def stored_token(secret: str, expires_at, used: bool = False) -> PasswordResetToken:
    return PasswordResetToken(
        id=uuid4(),
        user_id=uuid4(),
        token_hash=hash_secret(secret),
        used=used,
        expires_at=expires_at,
    )


def test_hash_secret_is_sha256_hex():
    digest = hash_secret("abc")
    assert digest == hashlib.sha256(b"abc").hexdigest()
    assert len(digest) == 64


def test_parse_credential_splits_id_and_secret():
    token_id = uuid4()
    assert parse_credential(f"{token_id}:deadbeef") == (token_id, "deadbeef")


@pytest.mark.parametrize(
    "raw",
    ["", "no-separator", "a:b:c", ":secret", f"{uuid4()}:", "not-a-uuid:secret"],
)
def test_parse_credential_rejects_malformed_values(raw):
    assert parse_credential(raw) is None


@pytest.mark.asyncio
async def test_issue_persists_only_the_digest(mock_uow, clock, now):
    store = mock_uow.password_reset_tokens
    lifecycle = TokenLifecycle(store, clock)
    user_id = uuid4()

    issued = await lifecycle.issue(user_id, timedelta(hours=1))

    assert len(issued.secret) == 64
    int(issued.secret, 16)  # hex encoded
    record = issued.record
    assert record.user_id == user_id
    assert record.used is False
    assert record.expires_at == now + timedelta(hours=1)
    assert record.token_hash == hash_secret(issued.secret)
    assert record.token_hash != issued.secret
    assert issued.credential == f"{record.id}:{issued.secret}"
    store.create.assert_awaited_once_with(record)


@pytest.mark.asyncio
async def test_issue_generates_distinct_secrets(mock_uow, clock):
    lifecycle = TokenLifecycle(mock_uow.password_reset_tokens, clock)
    first = await lifecycle.issue(uuid4(), timedelta(hours=1))
    second = await lifecycle.issue(uuid4(), timedelta(hours=1))
    assert first.secret != second.secret


@pytest.mark.asyncio
async def test_validate_accepts_live_token(mock_uow, clock, now):
    record = stored_token("s3cret", now + timedelta(minutes=5))
    mock_uow.password_reset_tokens.get_by_id.return_value = record

    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).validate(
        record.id, "s3cret"
    )

    assert result.is_ok()
    assert result.value is record
    mock_uow.password_reset_tokens.mark_used.assert_not_called()


@pytest.mark.asyncio
async def test_validate_unknown_token(mock_uow, clock):
    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).validate(
        uuid4(), "whatever"
    )
    assert result.is_err()
    assert result.error.code == TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_validate_reports_used_before_expired_or_mismatch(mock_uow, clock, now):
    record = stored_token("s3cret", now - timedelta(hours=1), used=True)
    mock_uow.password_reset_tokens.get_by_id.return_value = record

    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).validate(
        record.id, "wrong"
    )

    assert result.error.code == TOKEN_ALREADY_USED


@pytest.mark.asyncio
async def test_validate_reports_expired_before_mismatch(mock_uow, clock, now):
    record = stored_token("s3cret", now - timedelta(seconds=1))
    mock_uow.password_reset_tokens.get_by_id.return_value = record

    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).validate(
        record.id, "wrong"
    )

    assert result.error.code == TOKEN_EXPIRED


@pytest.mark.asyncio
async def test_validate_token_expires_exactly_at_expires_at(mock_uow, clock, now):
    record = stored_token("s3cret", now)
    mock_uow.password_reset_tokens.get_by_id.return_value = record

    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).validate(
        record.id, "s3cret"
    )

    assert result.error.code == TOKEN_EXPIRED


@pytest.mark.asyncio
async def test_validate_wrong_secret(mock_uow, clock, now):
    record = stored_token("s3cret", now + timedelta(minutes=5))
    mock_uow.password_reset_tokens.get_by_id.return_value = record

    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).validate(
        record.id, "S3CRET"
    )

    assert result.error.code == TOKEN_MISMATCH
    assert result.error.message == "Invalid token"


@pytest.mark.asyncio
async def test_consume_lost_race(mock_uow, clock):
    mock_uow.password_reset_tokens.mark_used.return_value = False

    result = await TokenLifecycle(mock_uow.password_reset_tokens, clock).consume(uuid4())

    assert result.is_err()
    assert result.error.code == TOKEN_ALREADY_USED


@pytest.mark.asyncio
async def test_redeem_validates_then_consumes(mock_uow, clock, now):
    record = stored_token("s3cret", now + timedelta(minutes=5))
    store = mock_uow.password_reset_tokens
    store.get_by_id.return_value = record

    result = await TokenLifecycle(store, clock).redeem(record.id, "s3cret")

    assert result.is_ok()
    assert result.value is record
    store.mark_used.assert_awaited_once_with(record.id)


@pytest.mark.asyncio
async def test_redeem_does_not_consume_invalid_token(mock_uow, clock, now):
    record = stored_token("s3cret", now + timedelta(minutes=5))
    store = mock_uow.password_reset_tokens
    store.get_by_id.return_value = record

    result = await TokenLifecycle(store, clock).redeem(record.id, "wrong")

    assert result.error.code == TOKEN_MISMATCH
    store.mark_used.assert_not_called()


@pytest.mark.asyncio
async def test_redeem_reports_lost_race(mock_uow, clock, now):
    record = stored_token("s3cret", now + timedelta(minutes=5))
    store = mock_uow.password_reset_tokens
    store.get_by_id.return_value = record
    store.mark_used.return_value = False

    result = await TokenLifecycle(store, clock).redeem(record.id, "s3cret")

    assert result.error.code == TOKEN_ALREADY_USED
