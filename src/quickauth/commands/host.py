"""Host commands -- inspect the configured browser backend."""

from __future__ import annotations

import typer

from quickauth.commands import context_config
from quickauth.exceptions import HostError, QuickAuthError
from quickauth.exit_codes import EXIT_HOST_ERROR
from quickauth.output import error, info, success, suggest


host_app = typer.Typer(no_args_is_help=True)


@host_app.command("status")
def host_status(ctx: typer.Context) -> None:
    """Check that the configured browser backend can be reached.

    Exits with code 6 when it cannot.

    Example::

        quickauth host status
        quickauth --devtools-url http://127.0.0.1:9333 host status
    """
    from quickauth.hosts import create_default_manager

    try:
        config = context_config(ctx)
        manager = create_default_manager()
        manager.discover()
        host = manager.create(config.host)
    except QuickAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Backend: {config.host.backend}")
    with host:
        if not host.is_available():
            error(f"Browser backend '{config.host.backend}' is not reachable.")
            if config.host.backend == "devtools":
                suggest(
                    "Start the browser with --remote-debugging-port and check "
                    f"host.devtools_url ({config.host.devtools_url})"
                )
            raise typer.Exit(code=EXIT_HOST_ERROR)
        try:
            description = host.describe()
        except HostError as exc:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None

    success(f"Reachable: {description}")
