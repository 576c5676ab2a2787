"""Application layer - port definitions.

Contains the port protocols that define the interfaces for adapter
implementations and external collaborators such as the HTTP client.

Contents:
    * :mod:`.ports` - Protocol definitions for adapter functions and the HTTP client
"""

from __future__ import annotations

from .ports import (
    DeployConfiguration,
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    HttpClient,
    HttpResponse,
    InitLogging,
    LoadSendgridConfigFromDict,
    SendEmail,
    SendNotification,
)

__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "HttpClient",
    "HttpResponse",
    "InitLogging",
    "LoadSendgridConfigFromDict",
    "SendEmail",
    "SendNotification",
]
