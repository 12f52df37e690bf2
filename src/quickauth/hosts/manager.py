"""Host manager -- registry and factory for browser backends.

The :class:`HostManager` maps backend names (``"devtools"``, ``"system"``)
to factories that build a :class:`~quickauth.hosts.base.BrowserHost` from a
:class:`~quickauth.models.HostConfig`. Third-party packages can add
backends by declaring an entry point in the ``quickauth.hosts`` group::

    [project.entry-points."quickauth.hosts"]
    firefox = "my_package.hosts:FirefoxHost"

The entry point must resolve to a callable taking a ``HostConfig``.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with the built-in backends.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Callable

from quickauth.exceptions import PluginError
from quickauth.hosts.base import BrowserHost
from quickauth.hosts.devtools import DevToolsHost
from quickauth.hosts.system import SystemBrowserHost
from quickauth.models import HostConfig

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "quickauth.hosts"
"""The entry-point group name used for backend discovery."""

HostFactory = Callable[[HostConfig], BrowserHost]


class HostManager:
    """Registry of named browser backend factories.

    Example::

        manager = HostManager()
        manager.register("system", lambda cfg: SystemBrowserHost())
        host = manager.create(HostConfig(backend="system"))
    """

    def __init__(self) -> None:
        self._factories: dict[str, HostFactory] = {}

    def register(self, name: str, factory: HostFactory) -> None:
        """Register *factory* under *name*, replacing any previous one."""
        self._factories[name] = factory

    def names(self) -> list[str]:
        """Return the registered backend names, sorted."""
        return sorted(self._factories)

    def discover(self) -> list[str]:
        """Register backends advertised in the ``quickauth.hosts`` entry-point group.

        Built-in names are never overridden. Entry points that fail to load
        are logged as warnings and skipped.

        Returns:
            The names of the newly registered backends.
        """
        loaded: list[str] = []
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self._factories:
                logger.debug("Host backend '%s' already registered, skipping", ep.name)
                continue
            try:
                factory = ep.load()
            except Exception as exc:
                logger.warning("Failed to load host backend '%s': %s", ep.name, exc)
                continue
            if not callable(factory):
                logger.warning("Host backend '%s' is not callable, skipping", ep.name)
                continue
            self._factories[ep.name] = factory
            loaded.append(ep.name)
        return loaded

    def create(self, config: HostConfig) -> BrowserHost:
        """Build the backend selected by ``config.backend``.

        Raises:
            PluginError: If no backend is registered under that name or the
                factory fails.
        """
        factory = self._factories.get(config.backend)
        if factory is None:
            available = ", ".join(self.names()) or "(none)"
            raise PluginError(
                f"Unknown host backend '{config.backend}'. Available backends: {available}"
            )
        try:
            return factory(config)
        except PluginError:
            raise
        except Exception as exc:
            raise PluginError(
                f"Host backend '{config.backend}' failed to initialise: {exc}"
            ) from exc


def create_default_manager() -> HostManager:
    """Return a :class:`HostManager` with the built-in backends registered."""
    manager = HostManager()
    manager.register(
        "devtools",
        lambda cfg: DevToolsHost(endpoint=cfg.devtools_url, timeout=cfg.timeout),
    )
    manager.register("system", lambda cfg: SystemBrowserHost())
    return manager
