"""Sending CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Email with HTML, Cc/Bcc, headers and attachments.
    * :func:`.send_notification.cli_send_notification` - Plain-text notification.
"""

from __future__ import annotations

from .send_email import cli_send_email
from .send_notification import cli_send_notification

__all__ = ["cli_send_email", "cli_send_notification"]
