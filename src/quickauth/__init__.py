"""quickauth -- pre-authenticate HTTP Basic Auth servers in a browser.

Some embedded browsers never show the Basic Auth prompt. quickauth
keeps a list of protected servers. For a chosen server it opens a URL with
the credentials embedded, which establishes the session, and then closes
that view again.

Typical workflow::

    quickauth servers add https://dav.example.com
    quickauth authorize https://dav.example.com -u alice

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware settings stores and global configuration.
    registry: The persisted list of server URLs.
    session: URL matching, bounded polling, and the session helper.
    hosts: Browser backends (DevTools endpoint, system browser).
    credentials: Credential form with empty-field validation.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
