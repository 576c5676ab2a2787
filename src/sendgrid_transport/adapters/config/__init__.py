"""Configuration adapter built on lib_layered_config.

Contents:
    * :mod:`.loader` - Cached layered loading with profiles
    * :mod:`.deploy` - Copy ``defaultconfig.toml`` into app/host/user layers
    * :mod:`.display` - Human/JSON display with the API key masked
    * :mod:`.overrides` - ``--set SECTION.KEY=VALUE`` parsing
"""

from __future__ import annotations

from .deploy import deploy_configuration
from .display import display_config, redact_secrets
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides

__all__ = [
    "get_config",
    "get_default_config_path",
    "deploy_configuration",
    "display_config",
    "redact_secrets",
    "apply_overrides",
]
