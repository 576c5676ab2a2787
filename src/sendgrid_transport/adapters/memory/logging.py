"""In-memory logging adapter for testing.

Commands bind log context through ``lib_log_rich.runtime.bind``, which needs
a live runtime. This adapter starts one that only fills the ring buffer:
console output is limited to CRITICAL, the queue is off and no external
backend (journald, eventlog, graylog) is touched.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config

from sendgrid_transport import __init__conf__


def init_logging_in_memory(config: Config) -> None:
    """Start a quiet lib_log_rich runtime unless one is already running.

    *config* is ignored; the runtime settings are fixed for tests.
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.runtime.init(
        lib_log_rich.runtime.RuntimeConfig(
            service=__init__conf__.name,
            environment="test",
            console_level="CRITICAL",
            backend_level="CRITICAL",
            queue_enabled=False,
        )
    )


__all__ = ["init_logging_in_memory"]
