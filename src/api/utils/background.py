import logging
import smtplib
from typing import AsyncContextManager, Callable

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import RequestPasswordResetUseCase

logger = logging.getLogger(__name__)


async def issue_password_reset(
    open_unit_of_work: Callable[[], AsyncContextManager[UnitOfWork]],
    email_sender: IEmailSender,
    email: str,
) -> None:
    """
    Look up the account, issue the reset token and send the link.

    Runs as a background task after the generic response has been sent,
    so known and unknown addresses answer after the same work.
    """
    try:
        async with open_unit_of_work() as uow:
            result = await RequestPasswordResetUseCase(uow, email_sender).execute(email)
    except (SQLAlchemyError, smtplib.SMTPException, OSError) as exc:
        logger.error(f"Password reset for {email} failed: {exc}")
        return

    if result.is_err():
        logger.error(f"Password reset for {email} failed: {result.error.message}")
