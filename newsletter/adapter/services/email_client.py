"""
Postmark-style email client over httpx.

One httpx.AsyncClient is shared by every call so connections are pooled;
close it with `aclose` on shutdown. Every call carries an explicit timeout.
Timeouts are reported as transient failures: the provider may or may not
have accepted the message.
"""

import logging
from typing import Optional

import httpx
from pydantic import SecretStr

from newsletter.app.services.email_client import IEmailClient
from newsletter.domain.values import SubscriberEmail
from newsletter.result import Error, Result, Return

logger = logging.getLogger(__name__)


class EmailClient(IEmailClient):
    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: SecretStr,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.sender = sender
        self._authorization_token = authorization_token
        self._timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self):
        await self._client.aclose()

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> Result[None]:
        payload = {
            "From": str(self.sender),
            "To": str(recipient),
            "Subject": subject,
            "HtmlBody": html_content,
            "TextBody": text_content,
        }
        headers = {"X-Postmark-Server-Token": self._authorization_token.get_secret_value()}

        try:
            response = await self._client.post(
                f"{self.base_url}/email", json=payload, headers=headers
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Email provider timed out after %ss", self._timeout)
            return Return.err(
                Error("EMAIL_TRANSIENT_FAILURE", "Email provider timed out", e)
            )
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning("Email provider returned HTTP %s", status_code)
            if status_code >= 500 or status_code == 429:
                return Return.err(
                    Error("EMAIL_TRANSIENT_FAILURE", "Email provider is unavailable", e)
                )
            return Return.err(
                Error("EMAIL_PERMANENT_FAILURE", "Email provider rejected the message", e)
            )
        except httpx.HTTPError as e:
            logger.warning("Email provider request failed: %s", type(e).__name__)
            return Return.err(
                Error("EMAIL_TRANSIENT_FAILURE", "Email provider could not be reached", e)
            )

        return Return.ok(None)
