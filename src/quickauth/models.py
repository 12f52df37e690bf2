"""Canonical Pydantic models shared across all quickauth modules.

The models fall into two groups:

**Persisted models** -- serialised as JSON in the user's config directory:
    :class:`ServerSettings` (the server registry blob), :class:`HostConfig`,
    :class:`PollingConfig` and :class:`GlobalConfig`.

**Runtime models** -- in memory only, never written to disk:
    :class:`AuthAttempt` and :class:`BrowserView`.

All models use Pydantic v2.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


# --- Server registry ---


class ServerSettings(BaseModel):
    """The persisted settings blob holding the registered server URLs.

    Stored as ``{"authServers": [...]}`` so the on-disk shape stays a single
    object with one field. Python code uses the ``auth_servers`` attribute.
    """

    model_config = ConfigDict(populate_by_name=True)

    auth_servers: list[str] = Field(
        default_factory=list,
        alias="authServers",
        description="Ordered list of distinct base URLs",
    )


# --- Global config ---


class HostConfig(BaseModel):
    """Which browser backend to drive and how to reach it."""

    backend: str = Field(
        default="devtools",
        description="Host backend: devtools, system, or an installed entry point name",
    )
    devtools_url: str = Field(
        default="http://127.0.0.1:9222",
        description="Base URL of the browser's remote debugging endpoint",
    )
    view_kind: str = Field(
        default="page", description="View type to search when closing the auth view"
    )
    timeout: float = Field(default=5.0, description="Host request timeout in seconds")


class PollingConfig(BaseModel):
    """Bounded retry policy used to find and close the auth view."""

    initial_delay: float = Field(
        default=0.1, ge=0, description="Seconds to wait before the first attempt"
    )
    max_attempts: int = Field(default=5, ge=1, description="Maximum number of attempts")
    interval: float = Field(
        default=0.1, ge=0, description="Seconds between consecutive attempts"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/quickauth/config.json``.

    Loaded and saved by :func:`~quickauth.config.load_global_config` and
    :func:`~quickauth.config.save_global_config`. Environment variables and
    CLI flags override these values; see
    :func:`~quickauth.config.resolve_config`.
    """

    host: HostConfig = Field(default_factory=HostConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)


# --- Runtime ---


class BrowserView(BaseModel):
    """One view (tab, window, web view) currently open in the host browser."""

    id: str
    kind: str = "page"
    url: str = ""
    title: Optional[str] = None


class AuthAttempt(BaseModel):
    """A single authentication attempt against one server.

    Holds the credentials only for as long as the attempt is running. The
    password and the derived URL are excluded from ``repr`` so they never
    show up in logs or tracebacks.
    """

    base_url: str
    username: str
    password: SecretStr = Field(repr=False)
    auth_url: str = Field(repr=False)

    @classmethod
    def create(cls, base_url: str, username: str, password: str) -> AuthAttempt:
        """Build an attempt, deriving :attr:`auth_url` from the inputs.

        Raises:
            InvalidServerUrlError: If *base_url* is not an absolute URL.
        """
        from quickauth.session.matching import build_auth_url

        return cls(
            base_url=base_url,
            username=username,
            password=SecretStr(password),
            auth_url=build_auth_url(base_url, username, password),
        )
