"""Immutable message model: addresses, attachments, email, envelope.

The model is deliberately small. It carries exactly what the SendGrid
payload needs and leaves MIME encoding to the provider.

Contents:
    * :class:`Address` - Email address with optional display name.
    * :class:`Attachment` - Raw attachment bytes with metadata.
    * :class:`Email` - The message as authored.
    * :class:`Envelope` - Authoritative sender and recipients.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from email.utils import parseaddr

from .errors import EnvelopeError, InvalidAddressError


@dataclass(frozen=True, slots=True)
class Address:
    """Email address with an optional display name.

    Example:
        >>> Address("bar@example.com", "Mr. Recipient").name
        'Mr. Recipient'
        >>> Address("")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidAddressError: Email address must not be empty
    """

    email: str
    name: str = ""

    def __post_init__(self) -> None:
        if not self.email or not self.email.strip():
            raise InvalidAddressError("Email address must not be empty")

    @classmethod
    def parse(cls, value: str) -> Address:
        """Parse ``"Name <addr>"`` or a bare ``addr`` into an Address.

        Example:
            >>> Address.parse("Ms. Foo Bar <foo@example.com>")
            Address(email='foo@example.com', name='Ms. Foo Bar')
            >>> Address.parse("foo@example.com")
            Address(email='foo@example.com', name='')
        """
        name, email = parseaddr(value)
        if not email:
            raise InvalidAddressError(f"Invalid email: {value}")
        return cls(email=email, name=name)

    @classmethod
    def coerce(cls, value: Address | str) -> Address:
        """Return *value* unchanged when already an Address, else parse it."""
        if isinstance(value, Address):
            return value
        return cls.parse(value)

    def matches(self, other: Address) -> bool:
        """Compare addresses ignoring display name and case."""
        return self.email.lower() == other.email.lower()

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>" if self.name else self.email


def _coerce_addresses(values: Iterable[Address | str]) -> tuple[Address, ...]:
    return tuple(Address.coerce(v) for v in values)


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to the message.

    Attributes:
        content: Raw, unencoded bytes.
        filename: Name shown to the recipient.
        content_type: Declared media type, or None when unknown.
        content_id: Content-ID for inline parts; None for regular attachments.
    """

    content: bytes
    filename: str
    content_type: str | None = None
    content_id: str | None = None

    @property
    def is_inline(self) -> bool:
        return bool(self.content_id)


@dataclass(frozen=True, slots=True)
class Email:
    """An email message as authored.

    Address fields accept :class:`Address` objects or plain strings; strings
    are parsed on construction. Custom headers are kept as ordered
    ``(name, value)`` pairs, duplicates included.

    Example:
        >>> email = Email(sender="foo@example.com", to=["Bar <bar@example.com>"], text="hi")
        >>> email.to[0].name
        'Bar'
    """

    sender: Address | None = None
    to: tuple[Address, ...] = ()
    cc: tuple[Address, ...] = ()
    bcc: tuple[Address, ...] = ()
    reply_to: tuple[Address, ...] = ()
    subject: str | None = None
    text: str | None = None
    html: str | None = None
    attachments: tuple[Attachment, ...] = ()
    headers: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        if self.sender is not None:
            object.__setattr__(self, "sender", Address.coerce(self.sender))
        for name in ("to", "cc", "bcc", "reply_to"):
            object.__setattr__(self, name, _coerce_addresses(getattr(self, name)))
        object.__setattr__(self, "attachments", tuple(self.attachments))
        pairs = self.headers.items() if isinstance(self.headers, Mapping) else self.headers
        object.__setattr__(self, "headers", tuple((str(k), str(v)) for k, v in pairs))

    @property
    def recipients(self) -> tuple[Address, ...]:
        """To, Cc and Bcc addresses in order, deduplicated by address."""
        seen: list[Address] = []
        for address in (*self.to, *self.cc, *self.bcc):
            if not any(address.matches(existing) for existing in seen):
                seen.append(address)
        return tuple(seen)


@dataclass(frozen=True, slots=True)
class Envelope:
    """Authoritative sender and recipients for one send.

    May differ from the message headers, for example when a Bcc list is
    expanded or mail is redirected in a staging environment.
    """

    sender: Address
    recipients: tuple[Address, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", Address.coerce(self.sender))
        object.__setattr__(self, "recipients", _coerce_addresses(self.recipients))
        if not self.recipients:
            raise EnvelopeError("An envelope must have at least one recipient")

    @classmethod
    def from_message(cls, email: Email) -> Envelope:
        """Derive the envelope from the message's From, To, Cc and Bcc.

        Raises:
            EnvelopeError: When the message has no sender or no recipients.

        Example:
            >>> env = Envelope.from_message(Email(sender="a@example.com", to=["b@example.com"], bcc=["c@example.com"]))
            >>> [r.email for r in env.recipients]
            ['b@example.com', 'c@example.com']
        """
        if email.sender is None:
            raise EnvelopeError("Unable to determine the sender of the message")
        recipients = email.recipients
        if not recipients:
            raise EnvelopeError("An envelope must have at least one recipient")
        return cls(sender=email.sender, recipients=recipients)


def contains_address(addresses: Sequence[Address], address: Address) -> bool:
    """Return True when *address* appears in *addresses* (case-insensitive)."""
    return any(address.matches(candidate) for candidate in addresses)


__all__ = [
    "Address",
    "Attachment",
    "Email",
    "Envelope",
    "contains_address",
]
