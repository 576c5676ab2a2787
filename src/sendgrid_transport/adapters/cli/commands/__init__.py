"""CLI command implementations.

Contents:
    * Info command from :mod:`.info`
    * Config commands from :mod:`.config`
    * Sending commands from :mod:`.email` (subpackage)
"""

from __future__ import annotations

from .config import cli_config, cli_config_deploy
from .email import cli_send_email, cli_send_notification
from .info import cli_info

__all__ = [
    "cli_config",
    "cli_config_deploy",
    "cli_info",
    "cli_send_email",
    "cli_send_notification",
]
