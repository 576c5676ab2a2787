"""Application ports: Protocol definitions for adapters and collaborators.

Callable ports define a ``__call__`` method whose signature exactly matches
the corresponding adapter function. Existing module-level functions satisfy
these protocols automatically via structural subtyping (PEP 544).

The HTTP client port is the seam for the outbound request: anything with a
``request(method, url, **options)`` returning an object shaped like
:class:`HttpResponse` works, ``httpx.Client`` included.

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``SendgridConfig``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import DeployTarget, OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.sendgrid.config import SendgridConfig
    from ..domain.response import SentMessage


class HttpResponse(Protocol):
    """Minimal response surface the transport reads."""

    @property
    def status_code(self) -> int: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def content(self) -> bytes: ...

    @property
    def text(self) -> str: ...

    @property
    def reason_phrase(self) -> str: ...


class HttpClient(Protocol):
    """Issue one HTTP request and return the completed response."""

    def request(self, method: str, url: str, **options: Any) -> HttpResponse: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DeployConfiguration(Protocol):
    """Deploy default configuration to specified target layers."""

    def __call__(
        self,
        *,
        targets: Sequence[DeployTarget],
        force: bool = ...,
        profile: str | None = ...,
        set_permissions: bool = ...,
    ) -> list[Path]: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendEmail(Protocol):
    """Send an email through the SendGrid Web API."""

    def __call__(
        self,
        *,
        config: SendgridConfig,
        recipients: str | Sequence[str] | None = ...,
        subject: str,
        body: str = ...,
        body_html: str = ...,
        from_address: str | None = ...,
        cc: Sequence[str] = ...,
        bcc: Sequence[str] = ...,
        reply_to: str | None = ...,
        attachments: Sequence[Path] | None = ...,
        headers: Mapping[str, str] | None = ...,
        client: HttpClient | None = ...,
    ) -> SentMessage: ...


class SendNotification(Protocol):
    """Send a simple plain-text notification email."""

    def __call__(
        self,
        *,
        config: SendgridConfig,
        recipients: str | Sequence[str] | None = ...,
        subject: str,
        message: str,
        from_address: str | None = ...,
        client: HttpClient | None = ...,
    ) -> SentMessage: ...


class LoadSendgridConfigFromDict(Protocol):
    """Load SendgridConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> SendgridConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "HttpClient",
    "HttpResponse",
    "InitLogging",
    "LoadSendgridConfigFromDict",
    "SendEmail",
    "SendNotification",
]
