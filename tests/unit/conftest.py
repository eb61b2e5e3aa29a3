from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.entities import PasswordResetToken, RefreshToken


def token_store(model):
    """Mocked token repository that builds real records of the given model"""
    store = MagicMock()
    store.new_record = MagicMock(side_effect=lambda **fields: model(**fields))
    store.create = AsyncMock(side_effect=lambda record: record)
    store.get_by_id = AsyncMock(return_value=None)
    store.mark_used = AsyncMock(return_value=True)
    store.mark_all_used_by_user_id = AsyncMock(return_value=0)
    return store


@pytest.fixture
def now():
    return datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)

    uow.password_reset_tokens = token_store(PasswordResetToken)
    uow.refresh_tokens = token_store(RefreshToken)

    uow.rate_limit_counters = MagicMock()
    uow.rate_limit_counters.hit = AsyncMock()

    uow.posts = MagicMock()
    uow.posts.list_all = AsyncMock(return_value=[])

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow
