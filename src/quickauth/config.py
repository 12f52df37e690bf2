"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent state for quickauth:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.quickauth/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Settings stores** -- the server registry is persisted through a small
  key-value store abstraction (:class:`SettingsStore`). The default
  :class:`JsonFileStore` writes ``data.json`` in the config directory;
  :class:`MemoryStore` keeps everything in a dict. :func:`load_settings`
  merges the stored blob over defaults and :func:`save_settings` writes it
  back.
* **Global config** -- a single :class:`~quickauth.models.GlobalConfig`
  JSON file storing the host backend and polling policy.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and the global config into the effective
  configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import copy
import json
import os
import platform
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from quickauth.exceptions import ConfigError
from quickauth.models import GlobalConfig, ServerSettings

_APP_NAME = "quickauth"
_CONFIG_FILENAME = "config.json"
_SETTINGS_FILENAME = "data.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/quickauth/`` (default ``~/.config/quickauth/``).
    On macOS/Windows: ``~/.quickauth/``.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/quickauth/`` (default ``~/.local/share/quickauth/``).
    On macOS/Windows: ``~/.quickauth/data/``.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On any failure the temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {what} at {path}: {exc}") from exc


# --- Settings stores ---


class SettingsStore(ABC):
    """Opaque key-value store the server registry is persisted through.

    Implementations only move a JSON-compatible dict in and out; merging
    with defaults and validation happen in :func:`load_settings`.
    """

    @abstractmethod
    def load(self) -> Optional[dict[str, Any]]:
        """Return the stored blob, or ``None`` when nothing has been saved yet."""
        ...

    @abstractmethod
    def save(self, data: dict[str, Any]) -> None:
        """Replace the stored blob with *data*."""
        ...


class JsonFileStore(SettingsStore):
    """Store the settings blob as a JSON file, written atomically.

    Args:
        path: Target file. Defaults to ``<config_dir>/data.json``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else get_config_dir() / _SETTINGS_FILENAME

    @property
    def path(self) -> Path:
        """The filesystem path of the settings file."""
        return self._path

    def load(self) -> Optional[dict[str, Any]]:
        if not self._path.is_file():
            return None
        data = _read_json(self._path, "settings")
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid settings at {self._path}: expected a JSON object")
        return data

    def save(self, data: dict[str, Any]) -> None:
        _atomic_write(self._path, json.dumps(data, indent=2) + "\n")


class MemoryStore(SettingsStore):
    """Keep the settings blob in memory. Useful for tests and embedding."""

    def __init__(self, data: Optional[dict[str, Any]] = None) -> None:
        self._data = copy.deepcopy(data) if data is not None else None
        self.save_count = 0

    def load(self) -> Optional[dict[str, Any]]:
        return copy.deepcopy(self._data)

    def save(self, data: dict[str, Any]) -> None:
        self._data = copy.deepcopy(data)
        self.save_count += 1


def load_settings(store: SettingsStore) -> ServerSettings:
    """Load the registry settings, merging the stored blob over defaults.

    Keys missing from the stored blob keep their default values; unknown
    keys are ignored.

    Raises:
        ConfigError: If the stored blob fails validation.
    """
    merged: dict[str, Any] = ServerSettings().model_dump(by_alias=True)
    stored = store.load()
    if stored:
        merged.update(stored)
    try:
        return ServerSettings.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc


def save_settings(store: SettingsStore, settings: ServerSettings) -> None:
    """Persist *settings* through *store* using the on-disk field names."""
    store.save(settings.model_dump(mode="json", by_alias=True))


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~quickauth.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    cli_host: Optional[str] = None,
    cli_devtools_url: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``--host``, ``--devtools-url``)
        2. Environment variables (``QUICKAUTH_HOST``, ``QUICKAUTH_DEVTOOLS_URL``)
        3. User config (``~/.config/quickauth/config.json``)
        4. Defaults

    Returns:
        The effective :class:`~quickauth.models.GlobalConfig`. The on-disk
        file is never modified.
    """
    config = load_global_config()

    env_host = os.environ.get("QUICKAUTH_HOST")
    if cli_host is not None:
        config.host.backend = cli_host
    elif env_host:
        config.host.backend = env_host

    env_url = os.environ.get("QUICKAUTH_DEVTOOLS_URL")
    if cli_devtools_url is not None:
        config.host.devtools_url = cli_devtools_url
    elif env_url:
        config.host.devtools_url = env_url

    return config
