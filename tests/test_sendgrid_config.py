"""SendgridConfig model stories: defaults, coercion, validation and redaction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sendgrid_transport.adapters.sendgrid.config import (
    DEFAULT_HOST,
    SendgridConfig,
    load_sendgrid_config_from_dict,
)

# ======================== Defaults ========================


@pytest.mark.os_agnostic
def test_default_config_has_no_api_key() -> None:
    assert SendgridConfig().api_key is None


@pytest.mark.os_agnostic
def test_default_host_resolves_to_sendgrid() -> None:
    config = SendgridConfig()

    assert config.host is None
    assert config.effective_host == DEFAULT_HOST == "api.sendgrid.com"


@pytest.mark.os_agnostic
def test_default_timeout_is_thirty_seconds() -> None:
    assert SendgridConfig().timeout == 30.0


@pytest.mark.os_agnostic
def test_default_recipients_is_empty_list() -> None:
    assert SendgridConfig().recipients == []


# ======================== Coercion ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("field", ["api_key", "host", "from_address", "from_name"])
def test_blank_strings_become_none(field: str) -> None:
    assert getattr(SendgridConfig.model_validate({field: "  "}), field) is None


@pytest.mark.os_agnostic
def test_single_recipient_string_becomes_a_list() -> None:
    assert SendgridConfig(recipients="ops@example.com").recipients == ["ops@example.com"]  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_empty_recipient_string_becomes_empty_list() -> None:
    assert SendgridConfig(recipients="").recipients == []  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_zero_port_means_default_port() -> None:
    assert SendgridConfig(port=0).port is None


# ======================== Validation ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("timeout", [0, -1.5])
def test_non_positive_timeout_is_rejected(timeout: float) -> None:
    with pytest.raises(ValidationError, match="timeout must be positive"):
        SendgridConfig(timeout=timeout)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("port", [-1, 65536])
def test_out_of_range_port_is_rejected(port: int) -> None:
    with pytest.raises(ValidationError, match="port must be 1-65535"):
        SendgridConfig(port=port)


@pytest.mark.os_agnostic
def test_invalid_from_address_is_rejected() -> None:
    with pytest.raises(ValidationError, match="invalid email address"):
        SendgridConfig(from_address="not-an-address")


@pytest.mark.os_agnostic
def test_invalid_recipient_is_rejected() -> None:
    with pytest.raises(ValidationError):
        SendgridConfig(recipients=["ok@example.com", "broken"])


@pytest.mark.os_agnostic
def test_config_is_frozen() -> None:
    config = SendgridConfig(api_key="SG.key")
    with pytest.raises(ValidationError):
        config.api_key = "other"  # type: ignore[misc]


# ======================== Redaction ========================


@pytest.mark.os_agnostic
def test_repr_and_str_hide_the_api_key() -> None:
    config = SendgridConfig(api_key="SG.secret123", from_address="noreply@example.com")

    for text in (repr(config), str(config)):
        assert "secret123" not in text
        assert "api_key='[REDACTED]'" in text
        assert "noreply@example.com" in text


@pytest.mark.os_agnostic
def test_repr_shows_none_when_no_key_is_set() -> None:
    assert "api_key=None" in repr(SendgridConfig())


# ======================== Loading from dict ========================


@pytest.mark.os_agnostic
def test_loader_reads_the_sendgrid_section() -> None:
    config = load_sendgrid_config_from_dict(
        {"sendgrid": {"api_key": "SG.key", "host": "api.eu.sendgrid.com", "timeout": 10}}
    )

    assert config.api_key == "SG.key"
    assert config.effective_host == "api.eu.sendgrid.com"
    assert config.timeout == 10.0


@pytest.mark.os_agnostic
def test_loader_without_section_returns_defaults() -> None:
    assert load_sendgrid_config_from_dict({"other": {}}) == SendgridConfig()


@pytest.mark.os_agnostic
def test_loader_accepts_defaultconfig_placeholders() -> None:
    """The shipped defaults (empty strings, port 0) load as "not configured"."""
    config = load_sendgrid_config_from_dict(
        {
            "sendgrid": {
                "api_key": "",
                "host": "",
                "port": 0,
                "timeout": 30.0,
                "from_address": "",
                "from_name": "",
                "recipients": [],
            }
        }
    )

    assert config == SendgridConfig()


@pytest.mark.os_agnostic
def test_loader_rejects_non_table_section() -> None:
    with pytest.raises(ValidationError):
        load_sendgrid_config_from_dict({"sendgrid": "invalid"})


@pytest.mark.os_agnostic
def test_loader_ignores_unknown_keys() -> None:
    assert load_sendgrid_config_from_dict({"sendgrid": {"unknown": 1}}).api_key is None
