"""Authorize command -- establish a Basic Auth session with one server.

Collects the credentials and hands them to
:class:`~quickauth.session.helper.SessionHelper`. The command then waits for
the helper's short polling loop to finish before exiting. Credentials live
only for the duration of the command.
"""

from __future__ import annotations

import functools
from typing import Optional

import typer

from quickauth.commands import context_config, context_flag
from quickauth.exceptions import QuickAuthError
from quickauth.output import debug, error, progress
from quickauth.session.polling import PollOutcome


def authorize_command(
    ctx: typer.Context,
    server: str = typer.Argument(
        help="Registered server URL, or its number from 'quickauth servers list'."
    ),
    username: Optional[str] = typer.Option(
        None, "--username", "-u", help="Basic Auth user name."
    ),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        envvar="QUICKAUTH_PASSWORD",
        help="Basic Auth password. Prompted for (hidden) when omitted.",
    ),
) -> None:
    """Open an authenticated view for SERVER, then close it again.

    Missing credentials are prompted for; both fields must be non-empty.
    With ``--no-input`` they must be supplied as options.

    Example::

        quickauth authorize https://dav.example.com -u alice
        quickauth authorize 2
    """
    from quickauth.hosts import create_default_manager
    from quickauth.credentials import CredentialForm
    from quickauth.registry import ServerRegistry
    from quickauth.session import SessionHelper, ThreadingScheduler

    try:
        base_url = ServerRegistry().resolve(server)
        config = context_config(ctx)
        manager = create_default_manager()
        manager.discover()
        host = manager.create(config.host)
    except QuickAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    scheduler = ThreadingScheduler()
    with host:
        helper = SessionHelper(
            host,
            scheduler,
            policy=config.polling,
            view_kind=config.host.view_kind,
        )
        form = CredentialForm(
            base_url, functools.partial(helper.establish_session, base_url)
        )
        try:
            form.prompt(username, password, no_input=context_flag(ctx, "no_input"))
        except QuickAuthError as exc:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None

        progress("Waiting for the authentication view...")
        scheduler.wait()

    for poller in helper.collect_finished():
        if poller.outcome is PollOutcome.MATCHED:
            debug(f"Closed authentication view on attempt {poller.attempts}")
        elif poller.outcome is PollOutcome.EXHAUSTED:
            debug(
                f"Authentication view not found after {poller.attempts} attempts; "
                "it was left open"
            )
        else:
            debug("Stopped looking for the authentication view after a host error")
