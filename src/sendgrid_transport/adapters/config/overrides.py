"""``--set SECTION.KEY=VALUE`` overrides applied on top of loaded Config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values an override string can turn into."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` argument."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Everything before the first ``=`` is the dotted path, everything after
    it is the value (so values may contain ``=``).

    Raises:
        ValueError: Missing ``=``, no dot in the path, or an empty path component.

    Examples:
        >>> override = parse_override("sendgrid.timeout=10")
        >>> override.section, override.key_path, override.value
        ('sendgrid', ('timeout',), 10)

        >>> parse_override("sendgrid.from_name=Ops=Team").value
        'Ops=Team'
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    path, value = raw.split("=", maxsplit=1)
    if "." not in path:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *keys = path.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(keys):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=tuple(keys), value=coerce_value(value))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret *raw* as JSON when possible, otherwise keep the string.

    Examples:
        >>> coerce_value("443")
        443
        >>> coerce_value("false")
        False
        >>> coerce_value('["ops@example.com"]')
        ['ops@example.com']
        >>> coerce_value("api.eu.sendgrid.com")
        'api.eu.sendgrid.com'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Insert *override* into *target*, creating intermediate tables.

    Raises:
        TypeError: An intermediate key already holds a non-table value.

    Example:
        >>> tree: dict[str, dict[str, object]] = {}
        >>> _nest_override(tree, ConfigOverride(section="lib_log_rich", key_path=("payload_limits", "max_chars"), value=1))
        >>> tree
        {'lib_log_rich': {'payload_limits': {'max_chars': 1}}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(child).__name__}")
        node = cast("dict[str, object]", child)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge every ``--set`` value into *config*.

    Returns *config* itself when there is nothing to apply.

    Raises:
        ValueError: Any override string is malformed.

    Examples:
        >>> cfg = Config({"sendgrid": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("sendgrid.timeout=5",))["sendgrid"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    tree: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(tree, parse_override(raw))
    return config.with_overrides(tree)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "parse_override",
    "coerce_value",
    "apply_overrides",
]
