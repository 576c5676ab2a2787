"""Interpret the SendGrid HTTP response.

``202 Accepted`` is the only success status. Everything else becomes a
:class:`~sendgrid_transport.domain.errors.DeliveryError` carrying the best
reason the body offers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final, cast

import orjson

from .errors import DeliveryError
from .message import Envelope

if TYPE_CHECKING:
    from ..application.ports import HttpResponse

ACCEPTED: Final[int] = 202
MESSAGE_ID_HEADER: Final[str] = "x-message-id"


@dataclass(frozen=True, slots=True)
class SentMessage:
    """Result of an accepted send.

    Attributes:
        message_id: Provider-assigned id, or None when the header was missing.
        envelope: Envelope the message was sent with.
        payload: JSON document that was submitted.
    """

    message_id: str | None
    envelope: Envelope
    payload: Mapping[str, Any] = field(default_factory=dict)


def _extract_error_messages(content: bytes) -> list[str]:
    """Return ``errors[].message`` values from a JSON body, or [] when unparseable.

    Example:
        >>> _extract_error_messages(b'{"errors": [{"message": "a"}, {"message": "b"}]}')
        ['a', 'b']
        >>> _extract_error_messages(b"<html>oops</html>")
        []
    """
    try:
        document: object = orjson.loads(content)
    except orjson.JSONDecodeError:
        return []
    if not isinstance(document, dict):
        return []
    errors = cast("dict[str, object]", document).get("errors")
    if not isinstance(errors, list):
        return []
    messages: list[str] = []
    for entry in cast("list[object]", errors):
        if isinstance(entry, dict):
            message = cast("dict[str, object]", entry).get("message")
            if isinstance(message, str) and message:
                messages.append(message)
    return messages


def describe_failure(status_code: int, content: bytes, text: str, reason_phrase: str = "") -> str:
    """Build a human-readable failure reason for a rejected request.

    Example:
        >>> describe_failure(400, b'{"errors": [{"message": "bad from"}]}', "")
        'Unable to send an email: bad from (code 400).'
        >>> describe_failure(502, b"Bad Gateway", "Bad Gateway")
        'Unable to send an email: Bad Gateway (code 502).'
        >>> describe_failure(500, b"", "", "Internal Server Error")
        'Unable to send an email: Internal Server Error (code 500).'
    """
    messages = _extract_error_messages(content)
    detail = "; ".join(messages) if messages else (text.strip() or reason_phrase or "no response body")
    return f"Unable to send an email: {detail} (code {status_code})."


def find_header(headers: Mapping[str, str], name: str) -> str | None:
    """Look up *name* in *headers* ignoring case.

    Clients other than httpx may hand back a plain dict.

    Example:
        >>> find_header({"X-Message-Id": "abc"}, "x-message-id")
        'abc'
        >>> find_header({}, "x-message-id") is None
        True
    """
    wanted = name.lower()
    return next((value for key, value in headers.items() if key.lower() == wanted), None)


def interpret_response(response: HttpResponse) -> str | None:
    """Return the message id of an accepted response or raise.

    Args:
        response: Response returned by the HTTP client.

    Returns:
        Value of the ``x-message-id`` header (any case), or None when absent or empty.

    Raises:
        DeliveryError: For any status other than 202.
    """
    if response.status_code != ACCEPTED:
        raise DeliveryError(
            describe_failure(response.status_code, response.content, response.text, response.reason_phrase),
            status_code=response.status_code,
            body=response.text,
        )
    message_id = find_header(response.headers, MESSAGE_ID_HEADER)
    return message_id or None


__all__ = [
    "ACCEPTED",
    "MESSAGE_ID_HEADER",
    "SentMessage",
    "describe_failure",
    "find_header",
    "interpret_response",
]
