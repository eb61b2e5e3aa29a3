"""
E-mail Senders

SMTP delivery and a logging stand-in for development.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Reset your password - Nubo"


def build_reset_message(sender: str, to_email: str, reset_url: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = to_email
    message["Subject"] = RESET_SUBJECT
    message.set_content(
        "Use the link below to choose a new password. It expires in one hour.\n\n"
        f"{reset_url}\n\n"
        "If you did not ask for this, ignore this e-mail."
    )
    message.add_alternative(
        "<p>Use the link below to choose a new password. It expires in one hour.</p>"
        f'<p><a href="{reset_url}">Reset password</a></p>'
        "<p>If you did not ask for this, ignore this e-mail.</p>",
        subtype="html",
    )
    return message


class SmtpEmailSender(IEmailSender):
    """Sends through an SMTP relay; smtplib runs in a worker thread"""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        message = build_reset_message(self.sender, to_email, reset_url)
        await asyncio.to_thread(self._deliver, message)
        logger.info(f"Password reset e-mail sent to {to_email}")


class LoggingEmailSender(IEmailSender):
    """Development stand-in: records that a mail would go out, without the link"""

    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        logger.info(f"SMTP not configured; password reset e-mail for {to_email} not delivered")
