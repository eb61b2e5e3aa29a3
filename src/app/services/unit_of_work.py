from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.post_repository import IPostRepository
from src.app.repositories.rate_limit_counter_repository import IRateLimitCounterRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    password_reset_tokens: IPasswordResetTokenRepository
    refresh_tokens: IRefreshTokenRepository
    rate_limit_counters: IRateLimitCounterRepository
    posts: IPostRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
