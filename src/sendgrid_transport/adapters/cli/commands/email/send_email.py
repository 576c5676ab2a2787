"""Send email CLI command.

Provides the send-email command with HTML, Cc/Bcc, reply-to, custom
headers and attachment support.
"""

from __future__ import annotations

import functools
from pathlib import Path

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


def _parse_headers(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``NAME=VALUE`` arguments into a header mapping.

    Raises:
        click.BadParameter: An entry has no ``=`` or an empty name.

    Example:
        >>> _parse_headers(None, None, ("X-Campaign=spring", "X-Note=a=b"))  # type: ignore[arg-type]
        {'X-Campaign': 'spring', 'X-Note': 'a=b'}
    """
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}")
        headers[name.strip()] = value
    return headers


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    required=False,
    help="Recipient, repeatable; defaults to sendgrid.recipients",
)
@click.option("--subject", required=True, help="Email subject line")
@click.option("--body", default="", help="Plain-text email body")
@click.option("--body-html", default="", help="HTML email body")
@click.option(
    "--from", "from_address", default=None, help="Sender; defaults to sendgrid.from_address"
)
@click.option("--cc", multiple=True, help="Cc recipient, repeatable")
@click.option("--bcc", multiple=True, help="Bcc recipient, repeatable")
@click.option("--reply-to", default=None, help="Reply-to address")
@click.option(
    "--header",
    "headers",
    multiple=True,
    callback=_parse_headers,
    metavar="NAME=VALUE",
    help="Extra header as NAME=VALUE, repeatable; reserved names are dropped",
)
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach, repeatable",
)
@sendgrid_config_options
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    recipients: tuple[str, ...],
    subject: str,
    body: str,
    body_html: str,
    from_address: str | None,
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    reply_to: str | None,
    headers: dict[str, str],
    attachments: tuple[str, ...],
    api_key: str | None,
    host: str | None,
    port: int | None,
    timeout: float | None,
) -> None:
    """Send an email through the SendGrid Web API.

    Prints the SendGrid message id on success.
    """
    cli_ctx = get_cli_context(ctx)
    resolved_recipients = list(recipients) if recipients else None
    extra = {"command": "send-email", "recipients": resolved_recipients, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        sendgrid_config = resolve_sendgrid_config(
            cli_ctx.config,
            cli_ctx.services.load_sendgrid_config_from_dict,
            filter_sentinels(api_key=api_key, host=host, port=port, timeout=timeout),
        )
        execute_with_send_error_handling(
            operation=functools.partial(
                cli_ctx.services.send_email,
                config=sendgrid_config,
                recipients=resolved_recipients,
                subject=subject,
                body=body,
                body_html=body_html,
                from_address=from_address,
                cc=list(cc),
                bcc=list(bcc),
                reply_to=reply_to,
                attachments=[Path(p) for p in attachments] if attachments else None,
                headers=headers or None,
            ),
            recipients=resolved_recipients,
            message_type="Email",
            catches_file_not_found=True,
        )


__all__ = ["cli_send_email"]
