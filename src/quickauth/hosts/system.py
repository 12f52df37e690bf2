"""The operating system's default browser, via :mod:`webbrowser`.

This backend can open the authenticated URL but has no way to see or close
tabs, so the polling loop always runs out of attempts and the tab stays
open. It exists for machines where no debuggable browser is running.
"""

from __future__ import annotations

import webbrowser

from quickauth.exceptions import HostError
from quickauth.hosts.base import BrowserHost
from quickauth.models import BrowserView


class SystemBrowserHost(BrowserHost):
    name = "system"

    def open_url(self, url: str) -> None:
        if not webbrowser.open(url, new=2):
            raise HostError("No web browser available to open the authentication URL")

    def list_views(self, kind: str) -> list[BrowserView]:
        return []

    def close_view(self, view: BrowserView) -> None:
        raise HostError("The system browser does not support closing views")

    def is_available(self) -> bool:
        try:
            webbrowser.get()
        except webbrowser.Error:
            return False
        return True

    def describe(self) -> str:
        return "system default browser (views cannot be closed automatically)"
