from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from newsletter.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_valid_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        """Get an unused, unexpired token by its hash"""
        pass

    @abstractmethod
    async def mark_used(self, token_hash: str, used_at: datetime) -> bool:
        """Set used_at on an unused token. Returns False if no row changed."""
        pass
