from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from newsletter.app.repositories.subscription_repository import ISubscriptionRepository
from newsletter.domain.entities import Subscription, SubscriptionStatus


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_confirmed_emails(self) -> List[str]:
        """Get the stored email of every confirmed subscriber"""
        stmt = select(Subscription.email).where(
            Subscription.status == SubscriptionStatus.confirmed
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
