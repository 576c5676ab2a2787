"""Test doubles for every application port.

Nothing here touches the network or the configuration directories. The
logging double starts a quiet lib_log_rich runtime because commands bind
log context through it.

Contents:
    * :mod:`.config` - empty configuration, no-op deploy and display
    * :mod:`.sendgrid` - :class:`RecordingHttpClient` and :class:`SendSpy`
    * :mod:`.logging` - quiet runtime for ``lib_log_rich.runtime.bind``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    deploy_configuration_in_memory,
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .sendgrid import (
    RecordedRequest,
    RecordingHttpClient,
    SendSpy,
    load_sendgrid_config_from_dict_in_memory,
)

# pyright checks each double against its port.
if TYPE_CHECKING:
    from sendgrid_transport.application.ports import (
        DeployConfiguration,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        HttpClient,
        InitLogging,
        LoadSendgridConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_deploy_configuration: DeployConfiguration = deploy_configuration_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_sendgrid_config: LoadSendgridConfigFromDict = load_sendgrid_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_http_client: HttpClient = RecordingHttpClient()

__all__ = [
    "RecordedRequest",
    "RecordingHttpClient",
    "SendSpy",
    "deploy_configuration_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_sendgrid_config_from_dict_in_memory",
]
