"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from sendgrid_transport.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No SendGrid API key configured")
        >>> str(err)
        'No SendGrid API key configured'
    """


class DeliveryError(Exception):
    """SendGrid refused the message.

    Raised for every response other than ``202 Accepted``. Carries the raw
    status code and response body next to the human-readable reason so
    callers can log or inspect the provider's answer.

    Attributes:
        status_code: HTTP status returned by the provider, if known.
        body: Raw response body text, if any.

    Example:
        >>> from sendgrid_transport.domain.errors import DeliveryError
        >>> err = DeliveryError("Unable to send an email: bad key (code 401).", status_code=401)
        >>> str(err)
        'Unable to send an email: bad key (code 401).'
        >>> err.status_code
        401
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InvalidAddressError(ValueError):
    """Email address validation failure.

    Raised when an address is empty or fails RFC 5321/5322 validation.
    Inherits from ValueError so generic ``except ValueError`` handlers
    catch it as an invalid argument.

    Example:
        >>> from sendgrid_transport.domain.errors import InvalidAddressError
        >>> err = InvalidAddressError("Invalid email: not-an-email")
        >>> str(err)
        'Invalid email: not-an-email'
        >>> isinstance(err, ValueError)
        True
    """


class EnvelopeError(ValueError):
    """An envelope could not be built from the message.

    Raised when no sender can be determined or the recipient list is empty.

    Example:
        >>> from sendgrid_transport.domain.errors import EnvelopeError
        >>> isinstance(EnvelopeError("no recipients"), ValueError)
        True
    """


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "EnvelopeError",
    "InvalidAddressError",
]
