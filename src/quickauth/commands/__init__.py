"""Built-in CLI sub-commands for quickauth.

* :mod:`~quickauth.commands.servers` -- list, add, edit and remove
  registered server URLs.
* :mod:`~quickauth.commands.authorize` -- collect credentials and
  establish a session with one server.
* :mod:`~quickauth.commands.about` -- what the tool does and its
  security caveats.
* :mod:`~quickauth.commands.config` -- view and modify global settings.
* :mod:`~quickauth.commands.host` -- check the configured browser backend.

Each module exports either a :class:`typer.Typer` sub-application or a
plain callback registered on the root app.
"""

from __future__ import annotations

import typer

from quickauth.models import GlobalConfig


def context_config(ctx: typer.Context) -> GlobalConfig:
    """Resolve the effective config using the overrides stored on *ctx*."""
    from quickauth.config import resolve_config

    obj = ctx.obj or {}
    return resolve_config(
        cli_host=obj.get("host"),
        cli_devtools_url=obj.get("devtools_url"),
    )


def context_flag(ctx: typer.Context, name: str) -> bool:
    """Return a boolean root option (``force``, ``no_input``) from *ctx*."""
    return bool(ctx.obj.get(name, False)) if ctx.obj else False
