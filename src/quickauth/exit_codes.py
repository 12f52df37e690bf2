"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~quickauth.exceptions.QuickAuthError` subclass.
Shell wrappers can inspect the exit code to tell a rejected server URL
apart from an unreachable browser without parsing stderr.

Example::

    $ quickauth servers add not-a-url
    $ echo $?
    2   # EXIT_INVALID_USAGE -- the URL was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or rejected input."""

EXIT_NOT_FOUND = 4
"""The requested server URL is not registered."""

EXIT_HOST_ERROR = 6
"""The host browser could not be reached or refused an operation."""

EXIT_PLUGIN_ERROR = 10
"""A host backend failed to load or is unknown."""

EXIT_CANCELLED = 130
"""The user interrupted the command (Ctrl-C)."""
