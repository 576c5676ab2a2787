"""Build the SendGrid v3 ``mail/send`` JSON document from a message.

Pure functions with no I/O: the same Email and Envelope always produce the
same payload, which makes the builder testable without any HTTP client.

Contents:
    * :func:`build_payload` - Email + Envelope to provider payload.
    * :func:`serialize_address` - Address to ``{"email", "name"}`` dict.
    * :data:`RESERVED_HEADERS` - Header names SendGrid refuses as custom headers.
"""

from __future__ import annotations

import base64
from typing import Any, Final

from .enums import BodyType, Disposition
from .message import Address, Attachment, Email, Envelope, contains_address

#: Headers SendGrid does not accept in the ``headers`` map (lowercase).
RESERVED_HEADERS: Final[frozenset[str]] = frozenset(
    {
        "x-sg-id",
        "x-sg-eid",
        "received",
        "dkim-signature",
        "content-transfer-encoding",
        "from",
        "to",
        "cc",
        "bcc",
        "subject",
        "content-type",
        "reply-to",
    }
)

DEFAULT_ATTACHMENT_TYPE: Final[str] = "application/octet-stream"


def serialize_address(address: Address) -> dict[str, str]:
    """Serialize an address, omitting the name when empty.

    Example:
        >>> serialize_address(Address("foo@example.com", "Ms. Foo Bar"))
        {'email': 'foo@example.com', 'name': 'Ms. Foo Bar'}
        >>> serialize_address(Address("foo@example.com"))
        {'email': 'foo@example.com'}
    """
    serialized = {"email": address.email}
    if address.name:
        serialized["name"] = address.name
    return serialized


def _to_recipients(email: Email, envelope: Envelope) -> list[Address]:
    """Envelope recipients that are not Cc/Bcc, named from the To header when possible."""
    hidden = (*email.cc, *email.bcc)
    recipients: list[Address] = []
    for recipient in envelope.recipients:
        if contains_address(hidden, recipient):
            continue
        if not recipient.name:
            named = next((a for a in email.to if a.matches(recipient) and a.name), None)
            if named is not None:
                recipient = Address(recipient.email, named.name)
        recipients.append(recipient)
    return recipients


def _build_personalization(email: Email, envelope: Envelope) -> dict[str, Any]:
    personalization: dict[str, Any] = {
        "to": [serialize_address(a) for a in _to_recipients(email, envelope)],
        "subject": email.subject,
    }
    cc = [serialize_address(a) for a in email.cc if contains_address(envelope.recipients, a)]
    if cc:
        personalization["cc"] = cc
    bcc = [serialize_address(a) for a in email.bcc if contains_address(envelope.recipients, a)]
    if bcc:
        personalization["bcc"] = bcc
    return personalization


def _build_content(email: Email) -> list[dict[str, str]]:
    # Empty bodies are skipped; SendGrid rejects empty content values.
    content: list[dict[str, str]] = []
    if email.text:
        content.append({"type": BodyType.TEXT.value, "value": email.text})
    if email.html:
        content.append({"type": BodyType.HTML.value, "value": email.html})
    return content


def encode_attachment_content(raw: bytes) -> str:
    r"""Base64-encode *raw* as one unbroken line.

    Example:
        >>> encode_attachment_content(b"Lorem ipsum")
        'TG9yZW0gaXBzdW0='
        >>> "\n" in encode_attachment_content(b"x" * 200)
        False
    """
    encoded = base64.b64encode(raw).decode("ascii")
    return encoded.replace("\r", "").replace("\n", "")


def _build_attachment(attachment: Attachment) -> dict[str, str]:
    built = {
        "content": encode_attachment_content(attachment.content),
        "filename": attachment.filename,
        "type": attachment.content_type or DEFAULT_ATTACHMENT_TYPE,
        "disposition": (Disposition.INLINE if attachment.is_inline else Disposition.ATTACHMENT).value,
    }
    if attachment.is_inline:
        built["content_id"] = attachment.content_id or ""
    return built


def _build_headers(email: Email) -> dict[str, str]:
    headers: dict[str, str] = {}
    for name, value in email.headers:
        if name.lower() in RESERVED_HEADERS:
            continue
        headers[name] = value
    return headers


def build_payload(email: Email, envelope: Envelope) -> dict[str, Any]:
    """Build the SendGrid ``mail/send`` request body.

    Produces exactly one personalization. ``from`` is the envelope sender,
    ``content`` is always present (empty when the message has no body),
    and ``attachments``, ``headers`` and ``reply_to`` appear only when the
    message carries them.

    Args:
        email: Message to serialize.
        envelope: Authoritative sender and recipients.

    Returns:
        JSON-ready dictionary matching the provider schema.

    Example:
        >>> email = Email(sender=Address("foo@example.com"), to=["bar@example.com"], text="content")
        >>> payload = build_payload(email, Envelope.from_message(email))
        >>> payload["personalizations"]
        [{'to': [{'email': 'bar@example.com'}], 'subject': None}]
        >>> payload["content"]
        [{'type': 'text/plain', 'value': 'content'}]
        >>> "attachments" in payload
        False
    """
    payload: dict[str, Any] = {
        "personalizations": [_build_personalization(email, envelope)],
        "from": serialize_address(envelope.sender),
        "content": _build_content(email),
    }
    if email.attachments:
        payload["attachments"] = [_build_attachment(a) for a in email.attachments]
    if email.reply_to:
        # SendGrid accepts a single reply-to address
        payload["reply_to"] = serialize_address(email.reply_to[0])
    headers = _build_headers(email)
    if headers:
        payload["headers"] = headers
    return payload


__all__ = [
    "DEFAULT_ATTACHMENT_TYPE",
    "RESERVED_HEADERS",
    "build_payload",
    "encode_attachment_content",
    "serialize_address",
]
