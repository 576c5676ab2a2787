"""Shared utilities for the sending CLI commands.

Contains configuration resolution, the ``--api-key``/``--host`` style
override options and the error-to-exit-code mapping shared between
send-email and send-notification.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from typing import Any, NoReturn, cast

import httpx
import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from sendgrid_transport import __init__conf__
from sendgrid_transport.adapters.sendgrid.config import SendgridConfig
from sendgrid_transport.application.ports import LoadSendgridConfigFromDict
from sendgrid_transport.domain.errors import ConfigurationError, DeliveryError
from sendgrid_transport.domain.response import SentMessage

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop unset options (None, empty tuple); turn tuples into lists.

    Example:
        >>> filter_sentinels(host=None, port=8443, recipients=("a@example.com",), cc=())
        {'port': 8443, 'recipients': ['a@example.com']}
    """
    result: dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None or value == ():
            continue
        result[key] = list(cast(tuple[Any, ...], value)) if isinstance(value, tuple) else value
    return result


def apply_validated_overrides(base_config: SendgridConfig, overrides: dict[str, Any]) -> SendgridConfig:
    """Merge *overrides* into *base_config* and re-run every validator.

    ``model_copy(update=...)`` would skip validation, so the merged dict is
    validated from scratch.

    Raises:
        ValidationError: An override value is invalid.

    Example:
        >>> apply_validated_overrides(SendgridConfig(), {"timeout": 5}).timeout
        5.0
    """
    if not overrides:
        return base_config
    return SendgridConfig.model_validate({**base_config.model_dump(), **overrides})


def sendgrid_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--api-key``, ``--host``, ``--port`` and ``--timeout`` to a command."""
    options = [
        click.option("--api-key", default=None, help="Override the SendGrid API key"),
        click.option("--host", default=None, help="Override the API host (default api.sendgrid.com)"),
        click.option("--port", type=int, default=None, help="Override the API port"),
        click.option("--timeout", type=float, default=None, help="Override the request timeout in seconds"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def resolve_sendgrid_config(
    config: Config,
    loader: LoadSendgridConfigFromDict,
    overrides: dict[str, Any],
) -> SendgridConfig:
    """Build the effective SendgridConfig for one CLI invocation.

    Args:
        config: Already-loaded layered configuration.
        loader: Function turning the config dict into SendgridConfig.
        overrides: Filtered CLI option values.

    Returns:
        Validated configuration that carries an API key.

    Raises:
        SystemExit: CONFIG_ERROR (78) when the ``[sendgrid]`` section is invalid
            or no API key is available; INVALID_ARGUMENT (22) when a CLI
            override is invalid.
    """
    try:
        sendgrid_config = loader(config.as_dict())
    except ValidationError as exc:
        _handle_send_error(exc, "Invalid SendGrid configuration", "Invalid configuration", exit_code=ExitCode.CONFIG_ERROR)

    try:
        sendgrid_config = apply_validated_overrides(sendgrid_config, overrides)
    except ValidationError as exc:
        _handle_send_error(exc, "Invalid configuration", "Invalid option value", exit_code=ExitCode.INVALID_ARGUMENT)

    if sendgrid_config.api_key is None:
        logger.error("No SendGrid API key configured")
        click.echo(
            "\nError: No SendGrid API key configured. Set sendgrid.api_key in your config file or pass --api-key.",
            err=True,
        )
        click.echo(f"See: {__init__conf__.shell_command} config-deploy --target user", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR)

    return sendgrid_config


def execute_with_send_error_handling(
    *,
    operation: Callable[[], SentMessage],
    recipients: list[str] | None,
    message_type: str,
    catches_file_not_found: bool = False,
) -> None:
    """Run a send operation and translate failures into exit codes.

    Exceptions are caught most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. ValueError (bad address, no sender/recipients) -> INVALID_ARGUMENT (22)
    3. FileNotFoundError -> FILE_NOT_FOUND (2), only when *catches_file_not_found*
    4. DeliveryError -> DELIVERY_FAILURE (69)
    5. httpx.TimeoutException -> TIMEOUT (110)
    6. httpx.HTTPError -> DELIVERY_FAILURE (69)
    7. anything else -> GENERAL_ERROR (1), re-raised when ``DEVELOPMENT_MODE`` is set

    Raises:
        SystemExit: On any failure.
    """
    try:
        sent = operation()
    except ConfigurationError as exc:
        _handle_send_error(exc, f"{message_type} configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR)
    except ValueError as exc:
        _handle_send_error(
            exc,
            f"Invalid {message_type.lower()} parameters",
            f"Invalid {message_type.lower()} parameters",
            exit_code=ExitCode.INVALID_ARGUMENT,
        )
    except FileNotFoundError as exc:
        if not catches_file_not_found:
            raise
        _handle_send_error(exc, "Attachment file not found", "Attachment file not found", exit_code=ExitCode.FILE_NOT_FOUND)
    except DeliveryError as exc:
        _handle_send_error(exc, "SendGrid rejected the request", "Failed to send email", exit_code=ExitCode.DELIVERY_FAILURE)
    except httpx.TimeoutException as exc:
        _handle_send_error(exc, "SendGrid request timed out", "Request timed out", exit_code=ExitCode.TIMEOUT)
    except httpx.HTTPError as exc:
        _handle_send_error(exc, "SendGrid request failed", "Failed to reach SendGrid", exit_code=ExitCode.DELIVERY_FAILURE)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _handle_send_error(
            exc,
            f"Unexpected error sending {message_type.lower()}",
            "Unexpected error",
            exit_code=ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )
    else:
        _report_sent(sent, recipients, message_type)


def _report_sent(sent: SentMessage, recipients: list[str] | None, message_type: str) -> None:
    message_id = sent.message_id or "none returned"
    click.echo(f"\n{message_type} accepted by SendGrid (message id: {message_id})")
    logger.info("%s sent via CLI", message_type, extra={"recipients": recipients, "message_id": sent.message_id})


def _handle_send_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    log_traceback: bool = False,
) -> NoReturn:
    """Log *exc*, print ``Error: <user_message> - <exc>`` and exit with *exit_code*."""
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "apply_validated_overrides",
    "execute_with_send_error_handling",
    "filter_sentinels",
    "resolve_sendgrid_config",
    "sendgrid_config_options",
]
