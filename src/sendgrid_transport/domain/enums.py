"""String enums shared by the payload builder and the CLI."""

from __future__ import annotations

from enum import Enum


class BodyType(str, Enum):
    """MIME type of one ``content`` entry; plain text always precedes HTML.

    Example:
        >>> [member.value for member in BodyType]
        ['text/plain', 'text/html']
    """

    TEXT = "text/plain"
    HTML = "text/html"


class Disposition(str, Enum):
    """How a client shows an attachment.

    ``INLINE`` is used only for attachments carrying a content id, which the
    HTML body references as ``cid:<id>``.

    Example:
        >>> Disposition.INLINE == "inline"
        True
    """

    ATTACHMENT = "attachment"
    INLINE = "inline"


class OutputFormat(str, Enum):
    """Rendering of the ``config`` command.

    Example:
        >>> OutputFormat("json") is OutputFormat.JSON
        True
    """

    HUMAN = "human"
    JSON = "json"


class DeployTarget(str, Enum):
    """Layer that ``config-deploy`` writes ``defaultconfig.toml`` into.

    ``APP`` and ``HOST`` are system-wide and usually need root; ``USER``
    keeps the API key in the invoking account's config directory.

    Example:
        >>> sorted(target.value for target in DeployTarget)
        ['app', 'host', 'user']
    """

    APP = "app"
    HOST = "host"
    USER = "user"


__all__ = [
    "BodyType",
    "DeployTarget",
    "Disposition",
    "OutputFormat",
]
