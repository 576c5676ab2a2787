"""``send-notification``: a one-line alert as a plain-text SendGrid message.

Meant for cron jobs and monitoring hooks; recipients and sender default to
the ``[sendgrid]`` section so a call can be as short as
``sendgrid-transport send-notification --subject "disk full" --message "..."``.
"""

from __future__ import annotations

import functools

import lib_log_rich.runtime
import rich_click as click

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    execute_with_send_error_handling,
    filter_sentinels,
    resolve_sendgrid_config,
    sendgrid_config_options,
)


@click.command("send-notification", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    required=False,
    help="Recipient, repeatable; defaults to sendgrid.recipients",
)
@click.option("--subject", required=True, help="Subject line")
@click.option("--message", required=True, help="Plain-text message body")
@click.option(
    "--from", "from_address", default=None, help="Sender; defaults to sendgrid.from_address"
)
@sendgrid_config_options
@click.pass_context
def cli_send_notification(
    ctx: click.Context,
    recipients: tuple[str, ...],
    subject: str,
    message: str,
    from_address: str | None,
    api_key: str | None,
    host: str | None,
    port: int | None,
    timeout: float | None,
) -> None:
    """Send a plain-text notification; exits non-zero when SendGrid does not accept it."""
    cli_ctx = get_cli_context(ctx)
    resolved_recipients = list(recipients) if recipients else None
    extra = {"command": "send-notification", "recipients": resolved_recipients, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-notification", extra=extra):
        sendgrid_config = resolve_sendgrid_config(
            cli_ctx.config,
            cli_ctx.services.load_sendgrid_config_from_dict,
            filter_sentinels(api_key=api_key, host=host, port=port, timeout=timeout),
        )
        execute_with_send_error_handling(
            operation=functools.partial(
                cli_ctx.services.send_notification,
                config=sendgrid_config,
                recipients=resolved_recipients,
                subject=subject,
                message=message,
                from_address=from_address,
            ),
            recipients=resolved_recipients,
            message_type="Notification",
        )


__all__ = ["cli_send_notification"]
