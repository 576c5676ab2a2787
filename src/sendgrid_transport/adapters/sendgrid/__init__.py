"""SendGrid adapter - Web API v3 email sending.

Structure:
    * :mod:`.config` - SendGrid configuration model and loader
    * :mod:`.transport` - The SendgridApiTransport class
    * :mod:`.sender` - Configuration-driven send functions
    * :mod:`.validation` - Runtime address validation

Contents:
    * :class:`.config.SendgridConfig` - Transport configuration container
    * :func:`.config.load_sendgrid_config_from_dict` - Config dict loader
    * :class:`.transport.SendgridApiTransport` - One-request-per-send transport
    * :func:`.sender.send_email` - Primary email sending interface
    * :func:`.sender.send_notification` - Simple notification wrapper
"""

from __future__ import annotations

from .config import SendgridConfig, load_sendgrid_config_from_dict
from .sender import send_email, send_notification
from .transport import SendgridApiTransport

__all__ = [
    "SendgridApiTransport",
    "SendgridConfig",
    "load_sendgrid_config_from_dict",
    "send_email",
    "send_notification",
]
