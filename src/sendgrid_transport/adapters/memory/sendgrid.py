"""In-memory SendGrid adapters for testing.

Provides a recording HTTP client for the transport and send functions that
satisfy the same Protocols as production adapters without network access.

Contents:
    * :class:`RecordedRequest` - One captured HTTP request.
    * :class:`RecordingHttpClient` - HttpClient double returning canned responses.
    * :class:`SendSpy` - Captures send_email/send_notification calls.
    * :func:`load_sendgrid_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from sendgrid_transport.domain.message import Address, Envelope
from sendgrid_transport.domain.response import SentMessage

from ..sendgrid.config import SendgridConfig
from ..sendgrid.validation import validate_recipients


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    """A request captured by :class:`RecordingHttpClient`."""

    method: str
    url: str
    options: dict[str, Any]

    @property
    def json(self) -> Any:
        return self.options.get("json")

    @property
    def headers(self) -> dict[str, str]:
        return dict(self.options.get("headers") or {})


def _accepted() -> httpx.Response:
    return httpx.Response(202, headers={"x-message-id": "1"})


@dataclass
class RecordingHttpClient:
    """HttpClient double that records requests and replays queued responses.

    Responses are consumed in order; when the queue is empty, a 202 with
    ``x-message-id: 1`` is returned. Set ``raise_exception`` to simulate a
    network failure.

    Example:
        >>> client = RecordingHttpClient()
        >>> client.request("POST", "https://api.sendgrid.com/v3/mail/send", json={}).status_code
        202
        >>> client.requests[0].method
        'POST'
    """

    responses: list[httpx.Response] = field(default_factory=list)
    requests: list[RecordedRequest] = field(default_factory=list)
    raise_exception: Exception | None = None

    def queue(self, status_code: int, *, headers: Mapping[str, str] | None = None, **kwargs: Any) -> None:
        """Queue a response; ``kwargs`` go to ``httpx.Response`` (``json=``, ``text=``, ``content=``)."""
        self.responses.append(httpx.Response(status_code, headers=dict(headers or {}), **kwargs))

    def request(self, method: str, url: str, **options: Any) -> httpx.Response:
        self.requests.append(RecordedRequest(method=method, url=url, options=dict(options)))
        if self.raise_exception is not None:
            raise self.raise_exception
        if self.responses:
            return self.responses.pop(0)
        return _accepted()


def _empty_record_list() -> list[dict[str, Any]]:
    """Create an empty typed list for send records."""
    return []


@dataclass
class SendSpy:
    """Captures send operations for test assertions.

    Each test should create its own SendSpy instance to avoid cross-test pollution.
    The spy's send methods match the Protocol signatures expected by AppServices.

    Attributes:
        sent_emails: List of captured send_email calls.
        sent_notifications: List of captured send_notification calls.
        message_id: Message id reported on success.
        raise_exception: When set, send operations raise this exception.

    Example:
        >>> spy = SendSpy()
        >>> config = SendgridConfig(api_key="SG.key", from_address="a@example.com")
        >>> spy.send_email(config=config, recipients="test@example.com", subject="Hi", body="Hello").message_id
        'spy-1'
        >>> len(spy.sent_emails)
        1
    """

    sent_emails: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    sent_notifications: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    message_id: str | None = "spy-1"
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_emails.clear()
        self.sent_notifications.clear()
        self.raise_exception = None

    def _result(self, config: SendgridConfig, recipients: str | Sequence[str] | None, from_address: str | None) -> SentMessage:
        if self.raise_exception is not None:
            raise self.raise_exception
        resolved = [recipients] if isinstance(recipients, str) else list(recipients or config.recipients)
        sender = from_address or config.from_address or "spy@example.com"
        envelope = Envelope(sender=Address.parse(sender), recipients=tuple(Address.parse(r) for r in resolved or [sender]))
        return SentMessage(message_id=self.message_id, envelope=envelope)

    def send_email(
        self,
        *,
        config: SendgridConfig,
        recipients: str | Sequence[str] | None = None,
        subject: str,
        body: str = "",
        body_html: str = "",
        from_address: str | None = None,
        cc: Sequence[str] = (),
        bcc: Sequence[str] = (),
        reply_to: str | None = None,
        attachments: Sequence[Path] | None = None,
        headers: Mapping[str, str] | None = None,
        client: Any = None,
    ) -> SentMessage:
        """Record the call and return a SentMessage based on spy state.

        Raises:
            InvalidAddressError: When recipients have invalid email format.
            Exception: If raise_exception is set, raises that exception.
        """
        validate_recipients(recipients)
        self.sent_emails.append(
            {
                "config": config,
                "recipients": recipients,
                "subject": subject,
                "body": body,
                "body_html": body_html,
                "from_address": from_address,
                "cc": list(cc),
                "bcc": list(bcc),
                "reply_to": reply_to,
                "attachments": list(attachments) if attachments else None,
                "headers": dict(headers) if headers else None,
            }
        )
        return self._result(config, recipients, from_address)

    def send_notification(
        self,
        *,
        config: SendgridConfig,
        recipients: str | Sequence[str] | None = None,
        subject: str,
        message: str,
        from_address: str | None = None,
        client: Any = None,
    ) -> SentMessage:
        """Record the call and return a SentMessage based on spy state.

        Raises:
            InvalidAddressError: When recipients have invalid email format.
            Exception: If raise_exception is set, raises that exception.
        """
        validate_recipients(recipients)
        self.sent_notifications.append(
            {
                "config": config,
                "recipients": recipients,
                "subject": subject,
                "message": message,
                "from_address": from_address,
            }
        )
        return self._result(config, recipients, from_address)


def load_sendgrid_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> SendgridConfig:
    """Parse SendGrid config from dict using the real Pydantic model."""
    raw = config_dict.get("sendgrid", {})
    return SendgridConfig.model_validate(raw if raw else {})


__all__ = [
    "RecordedRequest",
    "RecordingHttpClient",
    "SendSpy",
    "load_sendgrid_config_from_dict_in_memory",
]
