"""Tests for the ``[lib_log_rich]`` section parsing.

``init_logging`` itself runs through the CLI tests; here only the
translation into a RuntimeConfig is checked.
"""

from __future__ import annotations

import pytest
from lib_layered_config import Config

from sendgrid_transport import __init__conf__
from sendgrid_transport.adapters.logging.setup import LoggingConfigModel, build_runtime_config


@pytest.mark.os_agnostic
def test_logging_config_model_passes_unknown_keys_through() -> None:
    parsed = LoggingConfigModel.model_validate({"service": "mailer", "environment": "dev", "console_level": "DEBUG"})

    assert parsed.service == "mailer"
    assert parsed.environment == "dev"
    assert parsed.model_dump(exclude={"service", "environment"}, exclude_none=True) == {"console_level": "DEBUG"}


@pytest.mark.os_agnostic
def test_logging_config_model_defaults() -> None:
    parsed = LoggingConfigModel.model_validate({})

    assert parsed.service is None
    assert parsed.environment == "prod"


@pytest.mark.os_agnostic
def test_build_runtime_config_falls_back_to_the_package_name() -> None:
    runtime = build_runtime_config(Config({}, {}))

    assert runtime.service == __init__conf__.name
    assert runtime.environment == "prod"


@pytest.mark.os_agnostic
def test_build_runtime_config_uses_configured_levels() -> None:
    config = Config({"lib_log_rich": {"service": "mailer", "console_level": "ERROR"}}, {})

    runtime = build_runtime_config(config)

    assert runtime.service == "mailer"
    assert runtime.console_level == "ERROR"
