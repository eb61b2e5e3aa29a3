from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound e-mail interface - application layer"""

    @abstractmethod
    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        """Deliver a password reset link"""
        pass
