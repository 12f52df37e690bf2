"""Root Typer application and the ``quickauth`` console script.

Sub-commands:

* ``servers`` -- manage the registered Basic Auth servers
* ``authorize`` -- establish a browser session with one of them
* ``about`` -- what the tool does and its security caveats
* ``config`` -- tool settings
* ``host`` -- browser backend diagnostics

:func:`main` wraps the app so that a :class:`~quickauth.exceptions.QuickAuthError`
ends the process with its exit code, and anything unexpected leaves a crash
log in the data directory instead of a bare traceback.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Optional

import typer

from quickauth import __version__
from quickauth.commands.about import about_command
from quickauth.commands.authorize import authorize_command
from quickauth.commands.config import config_app
from quickauth.commands.host import host_app
from quickauth.commands.servers import servers_app
from quickauth.exceptions import QuickAuthError
from quickauth.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE
from quickauth.output import OutputFormat, OutputManager, error, set_output


app = typer.Typer(
    name="quickauth",
    help="Pre-authenticate HTTP Basic Auth servers in a browser without an auth prompt.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(servers_app, name="servers", help="Manage registered servers.")
app.command("authorize")(authorize_command)
app.command("about")(about_command)
app.add_typer(config_app, name="config", help="View and change settings.")
app.add_typer(host_app, name="host", help="Browser backend diagnostics.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"quickauth {__version__}")
        raise typer.Exit()


def _select_format(json_output: bool, plain_output: bool) -> OutputFormat:
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Print the version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit data as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Emit data as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print data and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug messages."),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
    no_input: bool = typer.Option(
        False, "--no-input", help="Never prompt; fail if input is missing."
    ),
    host: Optional[str] = typer.Option(
        None, "--host", help="Browser backend to use (devtools, system, ...)."
    ),
    devtools_url: Optional[str] = typer.Option(
        None, "--devtools-url", help="Browser remote debugging endpoint."
    ),
) -> None:
    """Install the output manager and share the global options via ``ctx.obj``."""
    set_output(
        OutputManager(
            format=_select_format(json_output, plain_output),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    ctx.ensure_object(dict)
    ctx.obj.update(
        force=force,
        no_input=no_input,
        verbose=verbose,
        host=host,
        devtools_url=devtools_url,
    )


def _cancel() -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_CANCELLED)


def _setup_signal_handlers() -> None:
    """Make Ctrl-C exit with code 130 even while a timer thread is running."""
    signal.signal(signal.SIGINT, lambda signum, frame: _cancel())


def _write_crash_log(exc: Exception) -> str:
    """Save the traceback of *exc* under ``<data_dir>/logs`` and return the path."""
    from quickauth.config import get_data_dir

    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    path.write_text("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return str(path)


def main() -> None:
    """Console-script entry point.

    Raises:
        SystemExit: Always, with the command's exit code.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        _cancel()
    except QuickAuthError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
