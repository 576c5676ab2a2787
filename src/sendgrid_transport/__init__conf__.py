"""Static package metadata surfaced to CLI commands and documentation.

Values mirror ``pyproject.toml``; ``tests/test_metadata_sync.py`` keeps
them honest.
"""

from __future__ import annotations

name = "sendgrid_transport"
title = "Send transactional email through the SendGrid Web API v3"
version = "1.0.0"
homepage = "https://github.com/bitranox/sendgrid_transport"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "sendgrid-transport"

# lib_layered_config identifiers; the slug also prefixes environment
# variables (SENDGRID_TRANSPORT___SECTION__KEY).
LAYEREDCONF_VENDOR = "bitranox"
LAYEREDCONF_APP = "SendGrid Transport"
LAYEREDCONF_SLUG = "sendgrid-transport"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for sendgrid_transport:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
        ("config_slug", LAYEREDCONF_SLUG),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
