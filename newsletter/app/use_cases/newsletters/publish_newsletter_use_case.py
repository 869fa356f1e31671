"""
Publish Newsletter Use Case

Sends a newsletter issue to all confirmed subscribers.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from newsletter.app.services.email_client import IEmailClient
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import SubscriberEmail
from newsletter.result import Error, Result, Return
from .dtos import PublishNewsletterCommand, PublishNewsletterResponse

logger = logging.getLogger(__name__)


class PublishNewsletterUseCase:
    """
    Use case for publishing a newsletter issue.

    Business Rules:
    - Runs inside the transaction opened by the idempotency coordinator;
      it neither enters nor commits the unit of work
    - Only confirmed subscribers receive the issue
    - Stored emails that no longer validate are skipped with a warning
    - The first delivery failure aborts the whole publication
    """

    def __init__(self, uow: UnitOfWork, email_client: IEmailClient):
        self.uow = uow
        self.email_client = email_client

    async def execute(self, command: PublishNewsletterCommand) -> Result[PublishNewsletterResponse]:
        """
        Execute publish newsletter use case.

        Errors:
            - UNEXPECTED_ERROR: storage failure
            - EMAIL_TRANSIENT_FAILURE / EMAIL_PERMANENT_FAILURE: delivery failed
        """
        try:
            stored_emails = await self.uow.subscriptions.get_confirmed_emails()
        except SQLAlchemyError as e:
            logger.exception("Failed to retrieve confirmed subscribers")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to retrieve confirmed subscribers", e)
            )

        delivered = 0
        skipped = 0
        for stored_email in stored_emails:
            parsed = SubscriberEmail.parse(stored_email)
            if parsed.is_err():
                # Validation rules may have tightened since the subscriber signed up
                logger.warning("Skipping a confirmed subscriber: %s", parsed.error.message)
                skipped += 1
                continue

            sent = await self.email_client.send_email(
                parsed.value, command.title, command.html_content, command.text_content
            )
            if sent.is_err():
                logger.error("Failed to send newsletter issue to %s", parsed.value)
                return Return.err(
                    Error(
                        sent.error.code,
                        f"Failed to send newsletter issue to {parsed.value}",
                        sent.error.cause,
                    )
                )
            delivered += 1

        logger.info("Newsletter issue delivered to %s subscribers", delivered)
        return Return.ok(PublishNewsletterResponse(delivered=delivered, skipped=skipped))
