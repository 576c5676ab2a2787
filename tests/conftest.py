"""Shared pytest fixtures for transport, CLI and module-entry tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from sendgrid_transport.adapters.memory import RecordingHttpClient, SendSpy
from sendgrid_transport.domain.message import Address, Attachment, Email

if TYPE_CHECKING:
    from sendgrid_transport.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

#: A ``[sendgrid]`` section that lets both send commands run without flags.
SENDGRID_SECTION: dict[str, Any] = {
    "api_key": "SG.test-key",
    "from_address": "sender@example.com",
    "from_name": "Sender",
    "recipients": ["ops@example.com"],
}


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g., JSON parsing) so log lines
    on stderr never contaminate it.
    """
    return CliRunner()


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test."""
    from sendgrid_transport.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts (no provenance)."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def http_client() -> RecordingHttpClient:
    """Fresh recording HTTP client; answers 202 with ``x-message-id: 1`` by default."""
    return RecordingHttpClient()


@pytest.fixture
def simple_email() -> Email:
    """A named sender, one named To recipient, subject and text body."""
    return Email(
        sender=Address("foo@example.com", "Ms. Foo Bar"),
        to=[Address("bar@example.com", "Mr. Recipient")],
        subject="Subject of the email",
        text="Some text",
    )


@pytest.fixture
def text_attachment() -> Attachment:
    return Attachment(content=b"some attachment", filename="report.txt", content_type="text/plain")


@pytest.fixture
def services_with_config(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a factory building in-memory services around an injected Config.

    Only the I/O boundary (``get_config``) is replaced with the given data;
    everything else comes from ``build_testing``.
    """
    from sendgrid_transport.composition import build_testing

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = dataclasses.replace(build_testing(), get_config=_fake_get_config)
        return lambda: services

    return _create


@pytest.fixture
def production_services_with_config(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Like ``services_with_config`` but with the production display/deploy adapters."""
    from sendgrid_transport.adapters.memory import init_logging_in_memory
    from sendgrid_transport.composition import build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = dataclasses.replace(
            build_production(), get_config=_fake_get_config, init_logging=init_logging_in_memory
        )
        return lambda: services

    return _create


@dataclass
class SendCliContext:
    """Services factory plus the spy that records what the CLI sent."""

    factory: Callable[[], Any]
    spy: SendSpy


@pytest.fixture
def send_cli_context(
    services_with_config: Callable[[dict[str, Any]], Callable[[], AppServices]],
) -> Callable[..., SendCliContext]:
    """Create a CLI context whose send functions are recorded by a SendSpy.

    The argument is the ``[sendgrid]`` section contents; without one,
    ``SENDGRID_SECTION`` is used.
    """
    from sendgrid_transport.adapters.memory import load_sendgrid_config_from_dict_in_memory

    def _create(sendgrid_data: dict[str, Any] | None = None) -> SendCliContext:
        spy = SendSpy()
        section = SENDGRID_SECTION if sendgrid_data is None else sendgrid_data
        base = services_with_config({"sendgrid": section})()
        services = dataclasses.replace(
            base,
            send_email=spy.send_email,
            send_notification=spy.send_notification,
            load_sendgrid_config_from_dict=load_sendgrid_config_from_dict_in_memory,
        )
        return SendCliContext(factory=lambda: services, spy=spy)

    return _create


@pytest.fixture
def attachment_file(tmp_path: Path) -> Path:
    path = tmp_path / "report.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    return path


@pytest.fixture
def inject_deploy_configuration() -> Callable[[Callable[..., list[Path]]], Callable[[], AppServices]]:
    """Return a factory that swaps ``deploy_configuration`` into testing services.

    Example:
        def test_deploy_called(cli_runner, inject_deploy_configuration) -> None:
            calls = []
            factory = inject_deploy_configuration(lambda **kwargs: calls.append(kwargs) or [])
            cli_runner.invoke(cli, ["config-deploy", "--target", "user"], obj=factory)
            assert len(calls) == 1
    """
    from sendgrid_transport.composition import build_testing

    def _inject(deploy_fn: Callable[..., list[Path]]) -> Callable[[], AppServices]:
        services = dataclasses.replace(build_testing(), deploy_configuration=deploy_fn)
        return lambda: services

    return _inject
