"""Browser backends the session helper can drive.

- :class:`BrowserHost` -- abstract open/list/close interface.
- :class:`DevToolsHost` -- Chromium-family browser via its debugging endpoint.
- :class:`SystemBrowserHost` -- OS default browser; open only.
- :class:`HostManager` / :func:`create_default_manager` -- name-based registry.
"""

from quickauth.hosts.base import BrowserHost
from quickauth.hosts.devtools import DevToolsHost
from quickauth.hosts.manager import HostManager, create_default_manager
from quickauth.hosts.system import SystemBrowserHost

__all__ = [
    "BrowserHost",
    "DevToolsHost",
    "HostManager",
    "SystemBrowserHost",
    "create_default_manager",
]
