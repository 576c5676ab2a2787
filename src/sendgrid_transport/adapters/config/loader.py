"""Layered configuration loading for the SendGrid transport.

Reads ``defaultconfig.toml`` plus the app, host, user, dotenv and
environment layers through lib_layered_config, optionally scoped to a
profile. Results are cached per ``(profile, start_dir)``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from sendgrid_transport import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Config loader callable that also exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are empty, too long or path-like.

    Raises:
        ValueError: When lib_layered_config refuses the name.

    Examples:
        >>> validate_profile("staging")

        >>> validate_profile("../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../secrets
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml`` next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
        >>> get_default_config_path().exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One cached Config per (profile, start_dir); fine for a short-lived CLI process.
@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load layered configuration with the bundled defaults underneath.

    Precedence, lowest first: defaults, app, host, user, dotenv, env.
    Environment variables use the slug prefix, e.g.
    ``SENDGRID_TRANSPORT___SENDGRID__API_KEY``.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into
            every configuration path.
        start_dir: Directory that seeds ``.env`` discovery; the working
            directory when None.

    Returns:
        Immutable Config with provenance for every key.

    Raises:
        ValueError: When *profile* is not a valid profile name.

    Example:
        >>> config = get_config()
        >>> config.get("sendgrid", default={}).get("timeout")
        30.0
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Drop cached Config objects so the next call re-reads every layer."""
    _read_layers.cache_clear()


# lru_cache's cache_clear is invisible once cast to the Protocol, so attach it explicitly.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "validate_profile",
    "get_config",
    "get_default_config_path",
]
