"""lib_log_rich runtime setup shared by the console script and ``python -m``.

The ``[lib_log_rich]`` section of the layered configuration is validated
here and handed to :class:`lib_log_rich.runtime.RuntimeConfig`. Standard
library loggers (the transport, the CLI and httpx) are bridged into the
runtime so their ``extra=`` fields reach every backend.
"""

from __future__ import annotations

import logging
from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from sendgrid_transport import __init__conf__

# httpx logs one INFO line per request; the transport already logs each send.
_QUIET_LOGGERS = ("httpx", "httpcore")


class LoggingConfigModel(BaseModel):
    """The ``[lib_log_rich]`` section.

    Only ``service`` and ``environment`` get defaults here; any other key
    (``console_level``, ``backend_level``, ``enable_graylog`` ...) is passed
    through unchanged.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel.model_validate({"console_level": "DEBUG"}).model_extra
        {'console_level': 'DEBUG'}
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Translate the ``[lib_log_rich]`` section into a RuntimeConfig.

    An unset or empty ``service`` falls back to the package name.

    Example:
        >>> runtime = build_runtime_config(Config({"lib_log_rich": {"environment": "staging"}}, {}))
        >>> (runtime.service, runtime.environment)
        ('sendgrid_transport', 'staging')
    """
    raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", raw) if raw else {})
    extra = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra,
    )


def init_logging(config: Config) -> None:
    """Start the lib_log_rich runtime once per process.

    ``.env`` files are loaded first so ``LOG_*`` variables can override the
    configured levels. Later calls return immediately.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = [
    "LoggingConfigModel",
    "build_runtime_config",
    "init_logging",
]
