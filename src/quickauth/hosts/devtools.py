"""Chromium-family browser driven through its DevTools HTTP endpoints.

Start the browser with ``--remote-debugging-port=9222`` and point
``host.devtools_url`` at it. Only the plain HTTP endpoints are used, no
websocket session is opened:

* ``PUT  /json/new?<url>``   -- open a new tab
* ``GET  /json/list``        -- enumerate targets (``type`` is the view kind)
* ``GET  /json/close/<id>``  -- close a target
* ``GET  /json/version``     -- reachability check
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from quickauth.exceptions import HostError
from quickauth.hosts.base import BrowserHost
from quickauth.models import BrowserView


class DevToolsHost(BrowserHost):
    """Talk to a browser's remote debugging endpoint over HTTP.

    Args:
        endpoint: Base URL of the debugging endpoint, e.g.
            ``http://127.0.0.1:9222``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.
    """

    name = "devtools"

    def __init__(
        self,
        endpoint: str = "http://127.0.0.1:9222",
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._client = httpx.Client(
            base_url=self._endpoint,
            timeout=timeout,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _request(self, method: str, path: str) -> httpx.Response:
        try:
            response = self._client.request(method, path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise HostError(
                f"Browser at {self._endpoint} rejected {method} {exc.request.url.path} "
                f"with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise HostError(f"Cannot reach browser at {self._endpoint}: {exc}") from exc
        return response

    def _json(self, method: str, path: str) -> Any:
        response = self._request(method, path)
        try:
            return response.json()
        except ValueError as exc:
            raise HostError(
                f"Browser at {self._endpoint} returned invalid JSON for {path}"
            ) from exc

    def open_url(self, url: str) -> None:
        self._request("PUT", f"/json/new?{quote(url, safe='')}")

    def list_views(self, kind: str) -> list[BrowserView]:
        targets = self._json("GET", "/json/list")
        if not isinstance(targets, list):
            raise HostError(f"Browser at {self._endpoint} returned an unexpected target list")
        views: list[BrowserView] = []
        for target in targets:
            if not isinstance(target, dict) or target.get("type") != kind:
                continue
            views.append(
                BrowserView(
                    id=str(target.get("id") or ""),
                    kind=kind,
                    url=target.get("url") or "",
                    title=target.get("title"),
                )
            )
        return views

    def close_view(self, view: BrowserView) -> None:
        self._request("GET", f"/json/close/{quote(view.id, safe='')}")

    def version(self) -> dict[str, Any]:
        """Return the browser's ``/json/version`` document."""
        data = self._json("GET", "/json/version")
        return data if isinstance(data, dict) else {}

    def is_available(self) -> bool:
        try:
            self.version()
        except HostError:
            return False
        return True

    def describe(self) -> str:
        browser = self.version().get("Browser", "unknown browser")
        return f"{browser} at {self._endpoint}"

    def close(self) -> None:
        self._client.close()
