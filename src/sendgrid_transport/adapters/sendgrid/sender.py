"""Configuration-driven send functions.

Provides the send_email and send_notification functions that resolve
sender and recipients from configuration, assemble an Email and hand it to
:class:`~.transport.SendgridApiTransport`.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from sendgrid_transport.domain.errors import ConfigurationError
from sendgrid_transport.domain.message import Address, Attachment, Email
from sendgrid_transport.domain.response import SentMessage

from .config import SendgridConfig
from .transport import SendgridApiTransport
from .validation import validate_recipient, validate_recipients

if TYPE_CHECKING:
    from sendgrid_transport.application.ports import HttpClient

logger = logging.getLogger(__name__)


def _resolve_sender(config: SendgridConfig, from_address: str | None) -> Address:
    """Determine the sender from override or config default.

    Args:
        config: Configuration with optional default from_address/from_name.
        from_address: Explicit override (``addr`` or ``Name <addr>``), or None.

    Returns:
        Resolved sender address.

    Raises:
        ValueError: When neither override nor config provides a from_address.
    """
    if from_address is not None:
        validate_recipient(from_address)
        return Address.parse(from_address)
    if config.from_address is None:
        raise ValueError("No from_address configured and no override provided")
    return Address(config.from_address, config.from_name or "")


def _resolve_recipients(
    config: SendgridConfig,
    recipients: str | Sequence[str] | None,
) -> list[str]:
    """Normalize recipients from override or config default.

    Args:
        config: Configuration with optional default recipients.
        recipients: Single address, sequence of addresses, or None for config default.

    Returns:
        Non-empty list of recipient addresses.

    Raises:
        ValueError: When no recipients are available from either source.
        InvalidAddressError: When a runtime recipient has invalid email format.
    """
    if recipients is not None:
        recipient_list = [recipients] if isinstance(recipients, str) else list(recipients)
        validate_recipients(recipient_list)
    else:
        recipient_list = list(config.recipients)

    if not recipient_list:
        raise ValueError("No recipients configured and no override provided")
    return recipient_list


def _validate_api_key(config: SendgridConfig) -> None:
    """Ensure an API key is configured.

    Raises:
        ConfigurationError: When sendgrid.api_key is empty.
    """
    if config.api_key is None:
        raise ConfigurationError("No SendGrid API key configured (sendgrid.api_key is empty)")


def load_attachment(path: Path) -> Attachment:
    """Read *path* into an Attachment, guessing the media type from its suffix.

    Raises:
        FileNotFoundError: When *path* does not exist.
    """
    content_type, _ = mimetypes.guess_type(path.name)
    return Attachment(content=path.read_bytes(), filename=path.name, content_type=content_type)


def send_email(
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
    client: HttpClient | None = None,
) -> SentMessage:
    """Send an email through the SendGrid Web API.

    Provides the primary email-sending interface that integrates with
    application configuration while exposing a clean, typed API.

    Args:
        config: SendGrid configuration with API key, endpoint and defaults.
        recipients: Single recipient address, sequence of addresses, or None to use
            config.recipients. When provided, replaces config recipients entirely.
        subject: Email subject line (UTF-8 supported).
        body: Plain-text email body; omitted from the payload when empty.
        body_html: HTML email body; omitted from the payload when empty.
        from_address: Override sender address. Uses config.from_address when None.
        cc: Carbon-copy addresses.
        bcc: Blind carbon-copy addresses.
        reply_to: Optional reply-to address.
        attachments: Optional sequence of file paths to attach.
        headers: Custom headers added to the message.
        client: HTTP client to use; a fresh ``httpx.Client`` when None.

    Returns:
        SentMessage with the provider message id.

    Raises:
        ValueError: No from_address or no recipients available.
        InvalidAddressError: A runtime address has invalid format.
        ConfigurationError: No API key configured.
        FileNotFoundError: An attachment path does not exist.
        DeliveryError: SendGrid rejected the request.
        httpx.HTTPError: Network-level failure.

    Side Effects:
        Issues one HTTPS request. Logs the attempt at INFO level.
    """
    sender = _resolve_sender(config, from_address)
    _validate_api_key(config)
    recipient_list = _resolve_recipients(config, recipients)
    validate_recipients(list(cc))
    validate_recipients(list(bcc))
    if reply_to is not None:
        validate_recipient(reply_to)

    email = Email(
        sender=sender,
        to=tuple(Address.parse(r) for r in recipient_list),
        cc=tuple(Address.parse(r) for r in cc),
        bcc=tuple(Address.parse(r) for r in bcc),
        reply_to=(Address.parse(reply_to),) if reply_to else (),
        subject=subject,
        text=body or None,
        html=body_html or None,
        attachments=tuple(load_attachment(p) for p in attachments or ()),
        headers=tuple((headers or {}).items()),
    )

    logger.info(
        "Sending email",
        extra={
            "sender": sender.email,
            "recipients": recipient_list,
            "subject": subject,
            "has_html": bool(body_html),
            "attachment_count": len(email.attachments),
        },
    )

    with SendgridApiTransport.from_config(config, client) as transport:
        return transport.send(email)


def send_notification(
    *,
    config: SendgridConfig,
    recipients: str | Sequence[str] | None = None,
    subject: str,
    message: str,
    from_address: str | None = None,
    client: HttpClient | None = None,
) -> SentMessage:
    """Send a simple plain-text notification email.

    Convenience wrapper for the common case of sending simple notifications
    without HTML or attachments.

    Args:
        config: SendGrid configuration.
        recipients: Single recipient address, sequence of addresses, or None to use
            config.recipients. When provided, replaces config recipients entirely.
        subject: Email subject line.
        message: Plain-text notification message.
        from_address: Override sender address. Uses config.from_address when None.
        client: HTTP client to use; a fresh ``httpx.Client`` when None.

    Returns:
        SentMessage with the provider message id.

    Raises:
        ValueError: No recipients configured and no override provided.
        ConfigurationError: No API key configured.
        DeliveryError: SendGrid rejected the request.
    """
    return send_email(
        config=config,
        recipients=recipients,
        subject=subject,
        body=message,
        from_address=from_address,
        client=client,
    )


__all__ = [
    "load_attachment",
    "send_email",
    "send_notification",
]
