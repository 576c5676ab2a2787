"""Render configuration through lib_layered_config's Rich display.

Secrets under ``sendgrid`` are masked before rendering so ``config``
output never shows the API key.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from sendgrid_transport.domain.enums import OutputFormat

REDACTED: Final[str] = "[REDACTED]"
_SECRET_KEYS: Final[frozenset[tuple[str, str]]] = frozenset({("sendgrid", "api_key")})


def redact_secrets(config: Config) -> Config:
    """Return *config* with configured secrets replaced by ``[REDACTED]``.

    Empty values stay as they are so an unset key is still visible as unset.

    Example:
        >>> cfg = Config({"sendgrid": {"api_key": "SG.x"}}, {})
        >>> redact_secrets(cfg)["sendgrid"]["api_key"]
        '[REDACTED]'
        >>> empty = Config({"sendgrid": {"api_key": ""}}, {})
        >>> redact_secrets(empty)["sendgrid"]["api_key"]
        ''
    """
    data = config.as_dict()
    overrides: dict[str, dict[str, Any]] = {}
    for section, key in _SECRET_KEYS:
        values: Any = data.get(section, {})
        if isinstance(values, Mapping) and values.get(key):
            overrides.setdefault(section, {})[key] = REDACTED
    return config.with_overrides(overrides) if overrides else config


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print *config* (or one *section*) as TOML-like text or JSON.

    Pending log records are flushed first so they do not interleave with
    the configuration dump.

    Raises:
        ValueError: The requested section does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        redact_secrets(config),
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["REDACTED", "display_config", "redact_secrets"]
