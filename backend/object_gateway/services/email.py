"""
Transactional e-mail through the Mailgun HTTP API.

Independent of the storage gateway; callers may use it, for example, to
notify about a finished upload.
"""
import logging
import time
from typing import Optional

import httpx

from object_gateway.config import settings as default_settings, Settings
from object_gateway.exceptions import EmailSendError
from object_gateway.utils.logging import log_email_sent

logger = logging.getLogger(__name__)


class MailgunEmailSender:
    """
    Sends e-mail through Mailgun's ``/messages`` endpoint.

    A new HTTP client is opened per message, bounded by ``timeout``
    (10 seconds by default).
    """

    def __init__(
        self,
        domain: str,
        api_key: str,
        sender: str,
        api_base: str = "https://api.mailgun.net/v3",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.domain = domain
        self.sender = sender
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "MailgunEmailSender":
        """
        Build a sender from environment settings.

        Raises:
            EmailSendError: Mailgun settings are incomplete
        """
        settings = settings or default_settings
        if not all([settings.mailgun_domain, settings.mailgun_api_key, settings.mailgun_from]):
            raise EmailSendError(
                "Mailgun not configured. "
                "Set MAILGUN_DOMAIN, MAILGUN_API_KEY and MAILGUN_FROM."
            )
        return cls(
            domain=settings.mailgun_domain,
            api_key=settings.mailgun_api_key,
            sender=settings.mailgun_from,
            api_base=settings.mailgun_api_base,
            timeout=settings.mailgun_timeout,
            **kwargs
        )

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/{self.domain}/messages"

    def send(self, to: str, subject: str, text: str, html: str = "") -> str:
        """
        Send a single message.

        Args:
            to: Recipient address
            subject: Subject line
            text: Plain-text body
            html: Optional HTML body (omitted when empty)

        Returns:
            Mailgun message id

        Raises:
            EmailSendError: network failure, timeout, or a non-2xx response
        """
        data = {
            "from": self.sender,
            "to": to,
            "subject": subject,
            "text": text,
        }
        if html:
            data["html"] = html

        start_time = time.time()
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    self.messages_url,
                    auth=("api", self._api_key),
                    data=data,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailSendError(
                f"Mailgun rejected message: {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise EmailSendError(f"Failed to reach Mailgun: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None
        message_id = payload.get("id", "") if isinstance(payload, dict) else ""

        log_email_sent(
            logger,
            message_id=message_id,
            domain=self.domain,
            duration_ms=(time.time() - start_time) * 1000,
        )
        return message_id
