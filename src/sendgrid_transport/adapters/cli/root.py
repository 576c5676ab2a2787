"""The ``sendgrid-transport`` command group.

Every invocation resolves configuration the same way before a subcommand
runs: layered files and environment for ``--profile``, then the ``--set``
overrides on top, then logging from the merged result. Subcommands read
the outcome through :func:`~.context.get_cli_context`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from sendgrid_transport import __init__conf__
from sendgrid_transport.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from sendgrid_transport.composition import AppServices


def _services_from(ctx: click.Context) -> AppServices:
    """Call the services factory that ``main`` (or a test) put into ``ctx.obj``."""
    factory = ctx.obj
    if not callable(factory):
        raise RuntimeError("Services factory not provided. This is a bug.")
    return factory()  # type: ignore[no-any-return]


def _load_config(services: AppServices, profile: str | None, set_overrides: tuple[str, ...]) -> Config:
    """Load the layers for *profile* and apply ``--set`` values on top.

    Raises:
        click.UsageError: An override is malformed or nests below a scalar.
    """
    config = services.get_config(profile=profile)
    try:
        return apply_overrides(config, set_overrides)
    except (ValueError, TypeError) as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Print the full traceback when a command fails")
@click.option("--profile", default=None, help="Configuration profile, e.g. 'staging' or 'eu'")
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override one configuration value for this run, e.g. sendgrid.timeout=10 (repeatable)",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Send transactional email through the SendGrid Web API v3.

    Example:
        >>> from click.testing import CliRunner
        >>> from sendgrid_transport.composition import build_testing
        >>> CliRunner().invoke(cli, ["info"], obj=build_testing).exit_code
        0
    """
    services = _services_from(ctx)
    config = _load_config(services, profile, set_overrides)
    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Deferred: the command modules import this package.
    from .commands import (
        cli_config,
        cli_config_deploy,
        cli_info,
        cli_send_email,
        cli_send_notification,
    )

    for command in (cli_info, cli_config, cli_config_deploy, cli_send_email, cli_send_notification):
        cli.add_command(command)


_register_commands()


__all__ = ["cli"]
