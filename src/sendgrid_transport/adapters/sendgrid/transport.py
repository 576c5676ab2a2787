"""SendGrid Web API v3 transport.

Provides :class:`SendgridApiTransport`, which turns an Email into one
``POST /v3/mail/send`` request and the response into a SentMessage or a
DeliveryError. The HTTP client is injected; by default an ``httpx.Client``
is created with the configured timeout.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Final

import httpx

from sendgrid_transport.domain.errors import ConfigurationError, DeliveryError
from sendgrid_transport.domain.message import Email, Envelope
from sendgrid_transport.domain.payload import build_payload
from sendgrid_transport.domain.response import SentMessage, interpret_response

from .config import DEFAULT_HOST

if TYPE_CHECKING:
    from sendgrid_transport.application.ports import HttpClient

    from .config import SendgridConfig

logger = logging.getLogger(__name__)

SCHEME: Final[str] = "sendgrid+api"
SEND_PATH: Final[str] = "/v3/mail/send"


class SendgridApiTransport:
    """Send messages through the SendGrid Web API.

    Host, port and API key are fixed at construction. The transport holds no
    other state, so concurrent use is as safe as the injected client.

    Args:
        api_key: SendGrid API key, sent as a bearer token.
        client: HTTP client with a ``request(method, url, **options)`` method.
            When None, an ``httpx.Client`` owned by the transport is created.
        host: Override for ``api.sendgrid.com``.
        port: Optional port; the HTTPS default is used when None.
        timeout: Timeout in seconds for the default client.

    Example:
        >>> str(SendgridApiTransport("KEY"))
        'sendgrid+api://api.sendgrid.com'
        >>> str(SendgridApiTransport("KEY", host="example.com", port=99))
        'sendgrid+api://example.com:99'
    """

    def __init__(
        self,
        api_key: str,
        client: HttpClient | None = None,
        *,
        host: str | None = None,
        port: int | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not api_key:
            raise ConfigurationError("SendGrid API key must not be empty")
        self._api_key = api_key
        self._host = host or DEFAULT_HOST
        self._port = port
        self._owns_client = client is None
        self._client: HttpClient = client if client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: SendgridConfig, client: HttpClient | None = None) -> SendgridApiTransport:
        """Build a transport from validated configuration.

        Raises:
            ConfigurationError: When no API key is configured.
        """
        if config.api_key is None:
            raise ConfigurationError("No SendGrid API key configured (sendgrid.api_key is empty)")
        return cls(config.api_key, client, host=config.host, port=config.port, timeout=config.timeout)

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int | None:
        return self._port

    @property
    def endpoint(self) -> str:
        """``host`` or ``host:port`` when a port is set."""
        return f"{self._host}:{self._port}" if self._port else self._host

    @property
    def url(self) -> str:
        return f"https://{self.endpoint}{SEND_PATH}"

    def send(self, email: Email, envelope: Envelope | None = None) -> SentMessage:
        """Submit *email* and return the accepted SentMessage.

        Args:
            email: Message to send.
            envelope: Authoritative sender/recipients; derived from the
                message headers when None.

        Returns:
            SentMessage carrying the provider message id (may be None).

        Raises:
            EnvelopeError: When no envelope is given and none can be derived.
            DeliveryError: When SendGrid answers with anything but 202.
            httpx.HTTPError: Network failures from the default client propagate unchanged.
        """
        envelope = envelope if envelope is not None else Envelope.from_message(email)
        payload = build_payload(email, envelope)

        logger.info(
            "Sending email via SendGrid",
            extra={
                "endpoint": self.endpoint,
                "sender": envelope.sender.email,
                "recipients": [r.email for r in envelope.recipients],
                "subject": email.subject,
                "attachment_count": len(email.attachments),
            },
        )

        response = self._client.request(
            "POST",
            self.url,
            json=payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )

        try:
            message_id = interpret_response(response)
        except DeliveryError as exc:
            logger.warning(
                "SendGrid rejected the message",
                extra={"endpoint": self.endpoint, "status_code": exc.status_code, "error": str(exc)},
            )
            raise

        logger.info("Email accepted by SendGrid", extra={"message_id": message_id})
        return SentMessage(message_id=message_id, envelope=envelope, payload=payload)

    def close(self) -> None:
        """Close the HTTP client when the transport created it."""
        if self._owns_client and isinstance(self._client, httpx.Client):
            self._client.close()

    def __enter__(self) -> SendgridApiTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"{SCHEME}://{self.endpoint}"

    def __repr__(self) -> str:
        return f"SendgridApiTransport(endpoint={self.endpoint!r}, api_key='[REDACTED]')"


__all__ = [
    "SCHEME",
    "SEND_PATH",
    "SendgridApiTransport",
]
