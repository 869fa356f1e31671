"""
Unit tests for PublishNewsletterUseCase

Tests all business logic with mocked dependencies.
"""
import pytest

from newsletter.app.use_cases.newsletters import (
    PublishNewsletterCommand,
    PublishNewsletterUseCase,
)
from newsletter.result import Error, Return


def _command():
    return PublishNewsletterCommand(
        title="Issue #1",
        html_content="<p>Hello</p>",
        text_content="Hello",
        idempotency_key="issue-1",
    )


@pytest.mark.asyncio
async def test_sends_to_every_confirmed_subscriber(mock_uow, mock_email_client):
    mock_uow.subscriptions.get_confirmed_emails.return_value = [
        "ursula@example.com",
        "le.guin@example.com",
    ]

    result = await PublishNewsletterUseCase(mock_uow, mock_email_client).execute(_command())

    assert result.is_ok()
    assert result.value.delivered == 2
    recipients = [str(c.args[0]) for c in mock_email_client.send_email.call_args_list]
    assert recipients == ["ursula@example.com", "le.guin@example.com"]
    subject, html_body, text_body = mock_email_client.send_email.call_args.args[1:]
    assert (subject, html_body, text_body) == ("Issue #1", "<p>Hello</p>", "Hello")
    # The idempotency coordinator owns the transaction
    mock_uow.__aenter__.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_skips_stored_emails_that_no_longer_validate(mock_uow, mock_email_client):
    mock_uow.subscriptions.get_confirmed_emails.return_value = [
        "my-invalid-email",
        "ursula@example.com",
    ]

    result = await PublishNewsletterUseCase(mock_uow, mock_email_client).execute(_command())

    assert result.is_ok()
    assert result.value.delivered == 1
    assert result.value.skipped == 1
    mock_email_client.send_email.assert_awaited_once()


@pytest.mark.asyncio
async def test_delivery_failure_aborts_publication(mock_uow, mock_email_client):
    mock_uow.subscriptions.get_confirmed_emails.return_value = [
        "ursula@example.com",
        "le.guin@example.com",
    ]
    mock_email_client.send_email.return_value = Return.err(
        Error("EMAIL_PERMANENT_FAILURE", "Email provider rejected the message")
    )

    result = await PublishNewsletterUseCase(mock_uow, mock_email_client).execute(_command())

    assert result.is_err()
    assert result.error.code == "EMAIL_PERMANENT_FAILURE"
    mock_email_client.send_email.assert_awaited_once()
