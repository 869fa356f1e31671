"""
Subscribe Use Case

Stores a new subscriber awaiting confirmation.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.entities import Subscription, SubscriptionStatus
from newsletter.domain.values import SubscriberEmail, SubscriberName
from newsletter.result import Error, Result, Return
from .dtos import SubscribeCommand, SubscribeResponse

logger = logging.getLogger(__name__)


class SubscribeUseCase:
    """
    Use case for signing up to the newsletter.

    Business Rules:
    - Name and email are validated before anything is stored
    - New subscribers start as pending_confirmation and receive no issues
    - An email address can only be subscribed once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SubscribeCommand) -> Result[SubscribeResponse]:
        """
        Execute subscribe use case.

        Errors:
            - VALIDATION_ERROR: invalid name or email address
            - UNEXPECTED_ERROR: storage failure, including an email already subscribed
        """
        name = SubscriberName.parse(command.name)
        if name.is_err():
            return Return.err(name.error)

        email = SubscriberEmail.parse(command.email)
        if email.is_err():
            return Return.err(email.error)

        async with self.uow:
            try:
                subscription = await self.uow.subscriptions.create(
                    Subscription(
                        email=str(email.value),
                        name=str(name.value),
                        status=SubscriptionStatus.pending_confirmation,
                    )
                )
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.exception("Failed to store new subscriber")
                return Return.err(Error("UNEXPECTED_ERROR", "Failed to store new subscriber", e))

            logger.info("New subscriber %s pending confirmation", subscription.id)
            return Return.ok(
                SubscribeResponse(subscription_id=subscription.id, status=subscription.status)
            )
