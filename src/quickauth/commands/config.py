"""``quickauth config`` -- inspect and change tool settings.

The settings live in ``config.json`` (:class:`~quickauth.models.GlobalConfig`):
which browser backend to drive, where its debugging endpoint is, and the
polling budget used to close the authentication view. The server list is
stored separately and is never touched by these commands.
"""

from __future__ import annotations

from typing import Any

import typer

from quickauth.commands import context_flag
from quickauth.exit_codes import EXIT_INVALID_USAGE
from quickauth.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


def _usage_error(message: str) -> typer.Exit:
    error(message)
    return typer.Exit(code=EXIT_INVALID_USAGE)


def _parent_of(data: dict[str, Any], key: str) -> tuple[dict[str, Any], str]:
    """Walk a dotted *key* and return the dict holding its last segment."""
    *sections, leaf = key.split(".")
    node = data
    for section in sections:
        child = node.get(section)
        if not isinstance(child, dict):
            raise _usage_error(f"Invalid config key: {key}")
        node = child
    if leaf not in node or isinstance(node[leaf], dict):
        raise _usage_error(f"Unknown config key: {key}")
    return node, leaf


def _coerce(current: Any, raw: str, key: str) -> Any:
    """Convert *raw* to the type of the value it replaces."""
    if isinstance(current, bool):
        return raw.lower() in ("true", "1", "yes")
    for kind, label in ((int, "integer"), (float, "number")):
        if isinstance(current, kind):
            try:
                return kind(raw)
            except ValueError:
                raise _usage_error(f"Expected {label} for {key}, got: {raw}") from None
    return raw


@config_app.command("show")
def config_show() -> None:
    """Print the stored settings.

    Example::

        quickauth config show
        quickauth --json config show
    """
    from quickauth.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    format_response(load_global_config().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted key, e.g. 'host.devtools_url'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Change one setting.

    The value takes the type of the setting it replaces, and the whole
    config is validated before it is written. Exits 2 on an unknown key or
    a value that does not fit.

    Example::

        quickauth config set host.backend system
        quickauth config set polling.max_attempts 10
        quickauth config set polling.interval 0.25
    """
    from quickauth.config import load_global_config, save_global_config
    from quickauth.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")
    parent, leaf = _parent_of(data, key)
    parent[leaf] = _coerce(parent[leaf], value, key)

    try:
        updated = GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise _usage_error(f"Validation error: {exc}") from None

    save_global_config(updated)
    success(f"Set {key} = {parent[leaf]}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default settings.

    Asks first unless ``--force`` is given. Registered servers are kept.

    Example::

        quickauth --force config reset
    """
    from quickauth.config import save_global_config
    from quickauth.models import GlobalConfig

    if not context_flag(ctx, "force") and not typer.confirm(
        "Reset all settings to defaults?"
    ):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Settings reset to defaults.")
