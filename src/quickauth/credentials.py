"""Credential form -- collects a username and password for one server.

The form only checks that both fields are filled in. The credentials go
straight to the submit callback and are not kept afterwards.
"""

from __future__ import annotations

from typing import Callable, Optional

import typer

from quickauth.exceptions import InvalidUsageError
from quickauth.output import info, warning

MISSING_FIELDS_MESSAGE = "Please enter both username and password"

SubmitCallback = Callable[[str, str], None]


class CredentialForm:
    """Interactive credential prompt for a single server.

    Args:
        base_url: The server the credentials are for (shown to the user).
        on_submit: Called with ``(username, password)`` once both are
            non-empty.
    """

    def __init__(self, base_url: str, on_submit: SubmitCallback) -> None:
        self.base_url = base_url
        self._on_submit = on_submit

    def submit(self, username: str, password: str) -> bool:
        """Validate and forward the credentials.

        Returns:
            ``True`` if the callback was invoked, ``False`` if a field was
            empty (a warning is shown and the form stays open).
        """
        if not username or not password:
            warning(MISSING_FIELDS_MESSAGE)
            return False
        self._on_submit(username, password)
        return True

    def prompt(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        no_input: bool = False,
    ) -> None:
        """Ask for missing fields until the form is submitted.

        Values passed in are used as-is for the first submission. Ctrl-C
        aborts the prompt.

        Raises:
            InvalidUsageError: If a field is missing and *no_input* is set.
            typer.Abort: If the user interrupts the prompt.
        """
        if username is not None and password is not None:
            if self.submit(username, password):
                return
            if no_input:
                raise InvalidUsageError(MISSING_FIELDS_MESSAGE)
        elif no_input:
            raise InvalidUsageError(
                f"{MISSING_FIELDS_MESSAGE} (--username and --password are "
                "required with --no-input)"
            )

        info(f"Enter credentials for: {self.base_url}")
        while True:
            entered_user = typer.prompt(
                "Username", default=username or "", show_default=bool(username)
            )
            entered_password = typer.prompt(
                "Password", default="", show_default=False, hide_input=True
            )
            if self.submit(entered_user, entered_password):
                return
