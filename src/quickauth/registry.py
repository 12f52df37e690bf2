"""Server registry -- the ordered, duplicate-free list of known base URLs.

The registry is the only persisted state in quickauth. It loads its list
from a :class:`~quickauth.config.SettingsStore` once and writes it back
after every change. A rejected change raises before anything is modified,
so the in-memory list and the store are left untouched.
"""

from __future__ import annotations

from typing import Optional

from quickauth.config import JsonFileStore, SettingsStore, load_settings, save_settings
from quickauth.exceptions import (
    DuplicateServerError,
    InvalidServerUrlError,
    InvalidUsageError,
    ServerNotFoundError,
)
from quickauth.session.matching import is_valid_url


class ServerRegistry:
    """Add, edit, remove and list registered server URLs.

    Args:
        store: Where the list is persisted. Defaults to the JSON file in the
            user's config directory.

    Example::

        registry = ServerRegistry(MemoryStore())
        registry.add("https://dav.example.com")
        registry.servers   # ['https://dav.example.com']
    """

    def __init__(self, store: Optional[SettingsStore] = None) -> None:
        self._store = store if store is not None else JsonFileStore()
        self._settings = load_settings(self._store)

    @property
    def servers(self) -> list[str]:
        """A copy of the registered URLs in insertion order."""
        return list(self._settings.auth_servers)

    def __contains__(self, url: object) -> bool:
        return url in self._settings.auth_servers

    def __len__(self) -> int:
        return len(self._settings.auth_servers)

    def _validate_new(self, url: str) -> None:
        if not is_valid_url(url):
            raise InvalidServerUrlError(url)
        if url in self._settings.auth_servers:
            raise DuplicateServerError(url)

    def _save(self) -> None:
        save_settings(self._store, self._settings)

    def add(self, url: str) -> str:
        """Append *url* and persist.

        Returns:
            The stored (whitespace-trimmed) URL.

        Raises:
            InvalidUsageError: If *url* is empty.
            InvalidServerUrlError: If *url* is not an absolute URL.
            DuplicateServerError: If *url* is already registered.
        """
        url = url.strip()
        if not url:
            raise InvalidUsageError("Server URL must not be empty")
        self._validate_new(url)
        self._settings.auth_servers.append(url)
        self._save()
        return url

    def edit(self, old: str, new: str) -> bool:
        """Replace *old* with *new* in place.

        An empty or unchanged *new* value is ignored.

        Returns:
            ``True`` if the list changed.

        Raises:
            ServerNotFoundError: If *old* is not registered.
            InvalidServerUrlError: If *new* is not an absolute URL.
            DuplicateServerError: If *new* is already registered.
        """
        try:
            index = self._settings.auth_servers.index(old)
        except ValueError:
            raise ServerNotFoundError(old) from None

        new = new.strip()
        if not new or new == old:
            return False
        self._validate_new(new)
        self._settings.auth_servers[index] = new
        self._save()
        return True

    def remove(self, url: str) -> None:
        """Remove the entry equal to *url* and persist.

        Raises:
            ServerNotFoundError: If *url* is not registered.
        """
        try:
            self._settings.auth_servers.remove(url)
        except ValueError:
            raise ServerNotFoundError(url) from None
        self._save()

    def resolve(self, ref: str) -> str:
        """Return the registered URL named by *ref*.

        *ref* is either a registered URL or its 1-based position in
        :attr:`servers`.

        Raises:
            ServerNotFoundError: If nothing matches.
        """
        if ref in self._settings.auth_servers:
            return ref
        if ref.isdigit():
            index = int(ref) - 1
            if 0 <= index < len(self._settings.auth_servers):
                return self._settings.auth_servers[index]
        raise ServerNotFoundError(ref)
