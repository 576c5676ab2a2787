"""Composition root: the only place adapters are chosen.

The CLI receives a zero-argument factory and calls it once per run, so a
test can swap the whole adapter set (network, filesystem, logging) by
passing :func:`build_testing` instead of :func:`build_production`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.deploy import deploy_configuration
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.logging.setup import init_logging
from ..adapters.sendgrid.config import load_sendgrid_config_from_dict
from ..adapters.sendgrid.sender import send_email, send_notification

if TYPE_CHECKING:
    from ..adapters.memory.sendgrid import SendSpy
    from ..application.ports import (
        DeployConfiguration,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadSendgridConfigFromDict,
        SendEmail,
        SendNotification,
    )

    # pyright verifies each production adapter against its port.
    _get_config: GetConfig = get_config
    _get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _deploy_configuration: DeployConfiguration = deploy_configuration
    _display_config: DisplayConfig = display_config
    _send_email: SendEmail = send_email
    _send_notification: SendNotification = send_notification
    _load_sendgrid_config: LoadSendgridConfigFromDict = load_sendgrid_config_from_dict
    _init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """One implementation per port; replace fields with ``dataclasses.replace``."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    deploy_configuration: DeployConfiguration
    display_config: DisplayConfig
    send_email: SendEmail
    send_notification: SendNotification
    load_sendgrid_config_from_dict: LoadSendgridConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Real configuration layers, the httpx transport and lib_log_rich."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        deploy_configuration=deploy_configuration,
        display_config=display_config,
        send_email=send_email,
        send_notification=send_notification,
        load_sendgrid_config_from_dict=load_sendgrid_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: SendSpy | None = None) -> AppServices:
    """In-memory adapters: empty configuration, no deployment, sends go to a spy.

    Args:
        spy: Spy that records sends. A fresh one is used when omitted; pass
            your own to assert on what the CLI sent.

    Example:
        >>> from sendgrid_transport.adapters.memory import SendSpy
        >>> spy = SendSpy()
        >>> services = build_testing(spy=spy)
        >>> services.get_config().as_dict()
        {}
    """
    from ..adapters.memory import (
        SendSpy,
        deploy_configuration_in_memory,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_sendgrid_config_from_dict_in_memory,
    )

    recorder = spy if spy is not None else SendSpy()
    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        deploy_configuration=deploy_configuration_in_memory,
        display_config=display_config_in_memory,
        send_email=recorder.send_email,
        send_notification=recorder.send_notification,
        load_sendgrid_config_from_dict=load_sendgrid_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
    "init_logging",
    "load_sendgrid_config_from_dict",
    "send_email",
    "send_notification",
]
