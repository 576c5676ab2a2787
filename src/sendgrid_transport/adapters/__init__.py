"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.sendgrid` - SendGrid Web API transport, config model and send functions
    * :mod:`.config` - Configuration loading, deployment, and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory doubles for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
