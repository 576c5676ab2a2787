"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the message model, the payload builder and the response
interpreter that together define how a message becomes a SendGrid request.

Contents:
    * :mod:`.message` - Address, Attachment, Email, Envelope
    * :mod:`.payload` - Provider payload builder
    * :mod:`.response` - Response interpretation and SentMessage
    * :mod:`.enums` - Domain enumerations (BodyType, Disposition, OutputFormat, DeployTarget)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import BodyType, DeployTarget, Disposition, OutputFormat
from .errors import ConfigurationError, DeliveryError, EnvelopeError, InvalidAddressError
from .message import Address, Attachment, Email, Envelope
from .payload import build_payload, serialize_address
from .response import SentMessage, interpret_response

__all__ = [
    # Message model
    "Address",
    "Attachment",
    "Email",
    "Envelope",
    # Behaviors
    "build_payload",
    "serialize_address",
    "interpret_response",
    "SentMessage",
    # Enums
    "BodyType",
    "DeployTarget",
    "Disposition",
    "OutputFormat",
    # Errors
    "ConfigurationError",
    "DeliveryError",
    "EnvelopeError",
    "InvalidAddressError",
]
