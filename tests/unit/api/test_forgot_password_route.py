"""
Unit tests for the forgot-password route and its background task

The route answers before any account lookup; the task does the work.
"""
import smtplib
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from fastapi import BackgroundTasks
from sqlalchemy.exc import OperationalError

from src.api.routes.auth import ForgotPasswordRequest, forgot_password
from src.api.utils.background import issue_password_reset
from src.app.use_cases.auth.request_password_reset_use_case import sent_response
from src.domain.entities import User


def opener(uow):
    @asynccontextmanager
    async def open_unit_of_work():
        yield uow

    return open_unit_of_work


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_password_reset = AsyncMock()
    return sender


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["known@example.com", "ghost@example.com"])
async def test_route_responds_before_any_store_work(email, email_sender):
    """Known and unknown addresses schedule the same task and touch nothing"""
    open_unit_of_work = MagicMock()
    background_tasks = BackgroundTasks()

    response = await forgot_password(
        ForgotPasswordRequest(email=email), background_tasks, open_unit_of_work, email_sender
    )

    assert response == sent_response()
    open_unit_of_work.assert_not_called()
    email_sender.send_password_reset.assert_not_called()

    assert len(background_tasks.tasks) == 1
    task = background_tasks.tasks[0]
    assert task.func is issue_password_reset
    assert task.args == (open_unit_of_work, email_sender, email)


@pytest.mark.asyncio
async def test_task_issues_and_sends_for_known_email(mock_uow, email_sender):
    user = User(
        id=uuid4(),
        email="known@example.com",
        username="known",
        name="Known",
        password_hash="hashed",
    )
    mock_uow.users.get_by_email.return_value = user

    await issue_password_reset(opener(mock_uow), email_sender, user.email)

    mock_uow.password_reset_tokens.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()
    email_sender.send_password_reset.assert_awaited_once()


@pytest.mark.asyncio
async def test_task_looks_up_unknown_email_and_stops(mock_uow, email_sender):
    await issue_password_reset(opener(mock_uow), email_sender, "ghost@example.com")

    mock_uow.users.get_by_email.assert_awaited_once_with("ghost@example.com")
    mock_uow.password_reset_tokens.create.assert_not_called()
    email_sender.send_password_reset.assert_not_called()


@pytest.mark.asyncio
async def test_task_logs_store_failure(mock_uow, email_sender, caplog):
    mock_uow.users.get_by_email.side_effect = OperationalError("SELECT", {}, Exception("locked"))

    await issue_password_reset(opener(mock_uow), email_sender, "known@example.com")

    assert "Password reset for known@example.com failed" in caplog.text
    email_sender.send_password_reset.assert_not_called()


@pytest.mark.asyncio
async def test_task_logs_delivery_failure(mock_uow, email_sender, caplog):
    mock_uow.users.get_by_email.return_value = User(
        id=uuid4(),
        email="known@example.com",
        username="known",
        name="Known",
        password_hash="hashed",
    )
    email_sender.send_password_reset.side_effect = smtplib.SMTPException("relay down")

    await issue_password_reset(opener(mock_uow), email_sender, "known@example.com")

    assert "relay down" in caplog.text
