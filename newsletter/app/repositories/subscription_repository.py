from abc import ABC, abstractmethod
from typing import List

from newsletter.domain.entities import Subscription


class ISubscriptionRepository(ABC):
    """Subscription repository interface - application layer"""

    @abstractmethod
    async def get_confirmed_emails(self) -> List[str]:
        """Get the stored email of every confirmed subscriber"""
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        pass
