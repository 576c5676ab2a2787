"""Public package surface for the SendGrid Web API v3 transport.

Routes imports through the architectural layers:
- Domain exports: message model, payload builder, response outcome, errors
- Adapter exports: the transport itself and its configuration model
- Composition exports: wired configuration loading
- Metadata: package information

Example:
    >>> from sendgrid_transport import Email, Envelope, build_payload
    >>> email = Email(sender="from@example.com", to=["to@example.com"], subject="Hi", text="Hello")
    >>> build_payload(email, Envelope.from_message(email))["personalizations"]
    [{'to': [{'email': 'to@example.com'}], 'subject': 'Hi'}]
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.sendgrid import SendgridApiTransport, SendgridConfig, send_email, send_notification

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    Address,
    Attachment,
    ConfigurationError,
    DeliveryError,
    Email,
    Envelope,
    EnvelopeError,
    InvalidAddressError,
    SentMessage,
    build_payload,
    interpret_response,
)

__all__ = [
    "Address",
    "Attachment",
    "ConfigurationError",
    "DeliveryError",
    "Email",
    "Envelope",
    "EnvelopeError",
    "InvalidAddressError",
    "SendgridApiTransport",
    "SendgridConfig",
    "SentMessage",
    "build_payload",
    "get_config",
    "interpret_response",
    "print_info",
    "send_email",
    "send_notification",
]
