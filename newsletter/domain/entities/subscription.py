"""
Subscription Entity

A newsletter subscriber. Only confirmed subscribers receive issues.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from newsletter.domain.clock import utc_now

from .enums import SubscriptionStatus


class Subscription(SQLModel, table=True):
    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=256)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.pending_confirmation)

    subscribed_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
