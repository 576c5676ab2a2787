"""SendGrid configuration model and loader.

Provides the SendgridConfig Pydantic model for validated, immutable
transport settings and the loader function to create it from configuration
dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_HOST = "api.sendgrid.com"


class SendgridConfig(BaseModel):
    """Validated, immutable SendGrid transport configuration.

    Example:
        >>> config = SendgridConfig(api_key="SG.key", from_address="noreply@example.com")
        >>> config.effective_host
        'api.sendgrid.com'
        >>> config.timeout
        30.0
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    host: str | None = None
    port: int | None = None
    timeout: float = 30.0
    from_address: str | None = None
    from_name: str | None = None
    recipients: list[str] = Field(default_factory=list)

    @field_validator("recipients", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings to single-element lists.

        Handles environment variables and .env files that provide single strings
        instead of TOML arrays. Empty strings become empty lists.

        Examples:
            >>> SendgridConfig._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> SendgridConfig._coerce_string_to_list("")
            []
        """
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, (list, tuple)):
            return list(cast("list[str] | tuple[str, ...]", v))
        return v

    @field_validator("api_key", "host", "from_address", "from_name", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" rather than
        explicit empty values, so an empty ``api_key`` never reaches the
        Authorization header.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("port", mode="before")
    @classmethod
    def _coerce_zero_port_to_none(cls, v: Any) -> int | None:
        """Treat 0 (and an empty string) as "use the default port"."""
        if v in (0, ""):
            return None
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> SendgridConfig:
        """Validate configuration values.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> SendgridConfig(timeout=-5.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if self.port is not None and not 1 <= self.port <= 65535:
            raise ValueError(f"port must be 1-65535, got {self.port}")

        if self.from_address is not None:
            validate_email_address(self.from_address)

        for recipient in self.recipients:
            validate_email_address(recipient)

        return self

    @property
    def effective_host(self) -> str:
        return self.host or DEFAULT_HOST

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = SendgridConfig(api_key="SG.secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"SendgridConfig({', '.join(fields)})"

    __str__ = __repr__


def load_sendgrid_config_from_dict(config_dict: Mapping[str, Any]) -> SendgridConfig:
    """Load SendgridConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    SendgridConfig Pydantic model. Single-parse validation at the boundary
    with no intermediate conversions.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'sendgrid' section.

    Returns:
        Configured transport settings with defaults for missing values.

    Example:
        >>> config = load_sendgrid_config_from_dict(
        ...     {"sendgrid": {"api_key": "SG.key", "from_address": "test@example.com"}}
        ... )
        >>> config.from_address
        'test@example.com'
        >>> load_sendgrid_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("sendgrid", {})

    # Non-dict section (e.g. "sendgrid": "invalid") fails validation here
    if not isinstance(section, Mapping):
        return SendgridConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return SendgridConfig.model_validate(raw)


__all__ = [
    "DEFAULT_HOST",
    "SendgridConfig",
    "load_sendgrid_config_from_dict",
]
