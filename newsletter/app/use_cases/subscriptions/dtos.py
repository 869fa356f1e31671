"""
Subscription Use Case DTOs (Data Transfer Objects)
"""

from uuid import UUID

from pydantic import BaseModel

from newsletter.domain.entities import SubscriptionStatus


class SubscribeCommand(BaseModel):
    """Sign up for the newsletter"""

    email: str
    name: str


class SubscribeResponse(BaseModel):
    """Response for subscribe use case"""

    subscription_id: UUID
    status: SubscriptionStatus
