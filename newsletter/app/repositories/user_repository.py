from abc import ABC, abstractmethod
from typing import Optional, Tuple
from uuid import UUID

from newsletter.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_credentials(self, username: str) -> Optional[Tuple[UUID, str]]:
        """Get (user_id, password_hash) by username"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
