"""Exception hierarchy for quickauth.

All exceptions inherit from :class:`QuickAuthError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`quickauth.exit_codes`.
The top-level error handler in :func:`quickauth.app.main` catches
``QuickAuthError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    QuickAuthError (exit 1)
    +-- InvalidUsageError       (exit 2)
    |   +-- InvalidServerUrlError
    |   +-- DuplicateServerError
    +-- ServerNotFoundError     (exit 4)
    +-- HostError               (exit 6)
    +-- PluginError             (exit 10)
    +-- ConfigError             (exit 1)
"""

from quickauth.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_HOST_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_PLUGIN_ERROR,
)


class QuickAuthError(Exception):
    """Base exception for all quickauth errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(QuickAuthError):
    """Raised for invalid CLI arguments, empty input, or missing credentials."""

    exit_code = EXIT_INVALID_USAGE


class InvalidServerUrlError(InvalidUsageError):
    """Raised when a server URL is not an absolute URL with scheme and host."""

    def __init__(self, url: str):
        super().__init__("Please enter a valid URL (e.g., https://example.com)")
        self.url = url


class DuplicateServerError(InvalidUsageError):
    """Raised when a server URL is already registered."""

    def __init__(self, url: str):
        super().__init__("This server URL already exists")
        self.url = url


class ServerNotFoundError(QuickAuthError):
    """Raised when a command names a server URL that is not registered."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, url: str):
        super().__init__(f"Server '{url}' is not registered")
        self.url = url


class HostError(QuickAuthError):
    """Raised when the host browser is unreachable or rejects an operation."""

    exit_code = EXIT_HOST_ERROR


class PluginError(QuickAuthError):
    """Raised when a host backend is unknown or fails to load."""

    exit_code = EXIT_PLUGIN_ERROR


class ConfigError(QuickAuthError):
    """Raised for configuration problems (invalid JSON, schema errors, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
