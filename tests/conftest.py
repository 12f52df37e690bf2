"""Shared test fixtures for quickauth.

Provides isolated config environments, output state management, a CLI
runner, and in-memory stand-ins for the host browser and the scheduler.
These fixtures are discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import heapq
import itertools
from pathlib import Path
from typing import Callable, Optional

import pytest

from quickauth.hosts.base import BrowserHost
from quickauth.models import BrowserView
from quickauth.output import OutputFormat, OutputManager, reset_output, set_output
from quickauth.session.polling import Scheduler


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams and the
    test finishes, the cached references become stale. Resetting forces a
    fresh manager on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path,
    forces XDG path resolution, and clears all QUICKAUTH_* environment
    variables.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("quickauth.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["QUICKAUTH_HOST", "QUICKAUTH_DEVTOOLS_URL", "QUICKAUTH_PASSWORD"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Host and scheduler stand-ins
# ---------------------------------------------------------------------------


class ManualScheduler(Scheduler):
    """Scheduler driven by a virtual clock.

    Nothing runs until :meth:`advance` or :meth:`run_all` is called.
    ``delays`` records every requested delay in scheduling order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.delays: list[float] = []
        self.fired_at: list[float] = []
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.delays.append(delay)
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            self.fired_at.append(due)
            callback()
        self.now = target

    def run_all(self) -> None:
        while self._queue:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            self.fired_at.append(due)
            callback()


class FakeHost(BrowserHost):
    """In-memory browser.

    Args:
        views: Views open from the start.
        show_opened_on: When set, every URL passed to :meth:`open_url`
            shows up as a view on this (1-based) ``list_views`` call.
        displayed_suffix: Appended to opened URLs when they show up, to
            mimic the browser adding a trailing slash.
        list_error: Raised from ``list_views`` when set.
        close_error: Raised from ``close_view`` when set.
    """

    name = "fake"

    def __init__(
        self,
        views: Optional[list[BrowserView]] = None,
        show_opened_on: Optional[int] = None,
        displayed_suffix: str = "",
        list_error: Optional[Exception] = None,
        close_error: Optional[Exception] = None,
    ) -> None:
        self.views = list(views or [])
        self.opened: list[str] = []
        self.closed: list[BrowserView] = []
        self.list_calls = 0
        self.released = False
        self._show_opened_on = show_opened_on
        self._suffix = displayed_suffix
        self._list_error = list_error
        self._close_error = close_error

    def open_url(self, url: str) -> None:
        self.opened.append(url)

    def list_views(self, kind: str) -> list[BrowserView]:
        self.list_calls += 1
        if self._list_error is not None:
            raise self._list_error
        if self._show_opened_on is not None and self.list_calls == self._show_opened_on:
            for url in self.opened:
                self.views.append(
                    BrowserView(id=f"view-{len(self.views) + 1}", kind="page", url=url + self._suffix)
                )
        return [v for v in self.views if v.kind == kind]

    def close_view(self, view: BrowserView) -> None:
        if self._close_error is not None:
            raise self._close_error
        self.closed.append(view)
        self.views.remove(view)

    def close(self) -> None:
        self.released = True


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_host() -> Callable[..., FakeHost]:
    """Factory fixture returning :class:`FakeHost` instances."""
    return FakeHost
