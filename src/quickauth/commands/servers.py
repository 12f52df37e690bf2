"""Server commands -- manage the list of Basic Auth servers.

Provides the ``quickauth servers`` sub-command group. Every change is
written to the settings file immediately; rejected input leaves the list
unchanged.

Typical workflow::

    quickauth servers add https://dav.example.com
    quickauth servers list
    quickauth authorize https://dav.example.com
"""

from __future__ import annotations

import typer

from quickauth.exceptions import QuickAuthError
from quickauth.output import error, info, print_table, success, suggest
from quickauth.registry import ServerRegistry


servers_app = typer.Typer(no_args_is_help=True)


def _fail(exc: QuickAuthError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


@servers_app.command("list")
def servers_list() -> None:
    """List registered servers in order.

    Example::

        quickauth servers list
        quickauth servers list --json
    """
    registry = ServerRegistry()
    if not len(registry):
        info("No servers registered.")
        suggest("Add one: quickauth servers add https://example.com")
        return

    rows = [[str(i), url] for i, url in enumerate(registry.servers, 1)]
    print_table(["#", "URL"], rows, title="Basic Auth servers")


@servers_app.command("add")
def servers_add(
    url: str = typer.Argument(help="Server base URL, e.g. https://example.com."),
) -> None:
    """Register a server base URL.

    The URL must be absolute (scheme and host) and not already registered.

    Example::

        quickauth servers add https://dav.example.com/remote.php/webdav
    """
    registry = ServerRegistry()
    try:
        stored = registry.add(url)
    except QuickAuthError as exc:
        raise _fail(exc) from None

    success(f"Added {stored}")
    suggest(f"Authorize it: quickauth authorize {stored}")


@servers_app.command("edit")
def servers_edit(
    old: str = typer.Argument(help="Registered URL (or its number) to change."),
    new: str = typer.Argument(help="Replacement URL."),
) -> None:
    """Replace a registered URL, keeping its position.

    An empty or identical replacement leaves the list untouched.

    Example::

        quickauth servers edit 1 https://files.example.com
    """
    registry = ServerRegistry()
    try:
        current = registry.resolve(old)
        changed = registry.edit(current, new)
    except QuickAuthError as exc:
        raise _fail(exc) from None

    if changed:
        success(f"Updated {current} -> {new.strip()}")
    else:
        info("Nothing to change.")


@servers_app.command("remove")
def servers_remove(
    url: str = typer.Argument(help="Registered URL (or its number) to remove."),
) -> None:
    """Remove a registered server.

    Example::

        quickauth servers remove https://dav.example.com
    """
    registry = ServerRegistry()
    try:
        current = registry.resolve(url)
        registry.remove(current)
    except QuickAuthError as exc:
        raise _fail(exc) from None

    success(f"Removed {current}")
