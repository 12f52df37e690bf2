"""Abstract interface to the host browser.

The session helper needs exactly three things from the browser it drives:
open a URL in a new view, enumerate the open views of a given kind, and
close one of them. :class:`BrowserHost` captures that contract; concrete
backends live next to this module and are looked up by name through
:class:`~quickauth.hosts.manager.HostManager`.

To add a backend, subclass :class:`BrowserHost`, implement the three
abstract methods, and register a factory under the ``quickauth.hosts``
entry-point group.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from quickauth.models import BrowserView


class BrowserHost(ABC):
    """A browser the tool can open, list and close views in.

    Hosts may hold network connections; use them as context managers or
    call :meth:`close` when done.
    """

    name: str = "host"

    @abstractmethod
    def open_url(self, url: str) -> None:
        """Open *url* in a new view.

        Fire-and-forget: returning does not mean the page loaded.

        Raises:
            HostError: If the request could not be handed to the browser.
        """
        ...

    @abstractmethod
    def list_views(self, kind: str) -> list[BrowserView]:
        """Return the open views whose type equals *kind*.

        Raises:
            HostError: If the browser cannot be queried.
        """
        ...

    @abstractmethod
    def close_view(self, view: BrowserView) -> None:
        """Close *view*.

        Raises:
            HostError: If the view could not be closed.
        """
        ...

    def is_available(self) -> bool:
        """Return True when the browser can currently be reached."""
        return True

    def describe(self) -> str:
        """Short human-readable description used by ``quickauth host status``."""
        return self.name

    def close(self) -> None:
        """Release any resources held by the host."""

    def __enter__(self) -> BrowserHost:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
