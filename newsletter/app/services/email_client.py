from abc import ABC, abstractmethod

from newsletter.domain.values import SubscriberEmail
from newsletter.result import Result


class IEmailClient(ABC):
    """Outbound email transport - application layer"""

    @abstractmethod
    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> Result[None]:
        """
        Send one email.

        Errors:
            - EMAIL_TRANSIENT_FAILURE: timeout, connection error or 5xx; safe to retry
            - EMAIL_PERMANENT_FAILURE: the provider rejected the request
        """
        pass
