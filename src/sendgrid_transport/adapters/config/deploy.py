"""Copy the bundled default configuration into app/host/user layers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lib_layered_config import deploy_config
from lib_layered_config.examples.deploy import DeployAction

from sendgrid_transport import __init__conf__
from sendgrid_transport.adapters.config.loader import get_default_config_path, validate_profile
from sendgrid_transport.domain.enums import DeployTarget

_WRITTEN = frozenset({DeployAction.CREATED, DeployAction.OVERWRITTEN})


def deploy_configuration(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
    set_permissions: bool = True,
) -> list[Path]:
    r"""Write ``defaultconfig.toml`` to the requested configuration layers.

    The deployed file is where operators put ``sendgrid.api_key`` and the
    default sender. The user layer is the usual target because it keeps the
    key private to one account.

    Args:
        targets: Layers to write (``DeployTarget.APP``, ``HOST``, ``USER``).
        force: Overwrite files that already exist.
        profile: Optional profile; files go to ``profile/<name>/`` below each layer.
        set_permissions: Let lib_layered_config apply its per-layer modes
            (private for the user layer). When False the umask applies.

    Returns:
        Paths that were created or overwritten; empty when everything existed.

    Raises:
        PermissionError: Writing the app or host layer without privileges.
        ValueError: Invalid profile name.

    Note:
        Linux paths: ``/etc/xdg/{slug}/config.toml`` (app),
        ``/etc/xdg/{slug}/hosts/{hostname}.toml`` (host),
        ``~/.config/{slug}/config.toml`` (user). macOS and Windows use
        ``{vendor}/{app}`` below Application Support and ProgramData/AppData.
    """
    if profile is not None:
        validate_profile(profile)

    results = deploy_config(
        source=get_default_config_path(),
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        targets=[target.value for target in targets],
        force=force,
        set_permissions=set_permissions,
    )

    paths: list[Path] = []
    for result in results:
        if result.action in _WRITTEN:
            paths.append(result.destination)
        paths.extend(extra.destination for extra in result.dot_d_results if extra.action in _WRITTEN)
    return paths


__all__ = ["deploy_configuration"]
