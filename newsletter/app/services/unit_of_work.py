from abc import ABC, abstractmethod

from newsletter.app.repositories.idempotency_repository import IIdempotencyRepository
from newsletter.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from newsletter.app.repositories.session_repository import ISessionRepository
from newsletter.app.repositories.subscription_repository import ISubscriptionRepository
from newsletter.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    password_reset_tokens: IPasswordResetTokenRepository
    idempotency: IIdempotencyRepository
    subscriptions: ISubscriptionRepository

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
