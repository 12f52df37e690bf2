"""About command -- explain what quickauth does and what to watch out for."""

from __future__ import annotations

from quickauth.output import print_data

ABOUT_SECTIONS: list[tuple[str, str]] = [
    (
        "Purpose",
        "Workaround for accessing HTTP Basic Auth protected resources in a "
        "browser that does not show authentication popups. quickauth "
        "pre-authenticates by opening a credential URL and automatically "
        "closing it.",
    ),
    (
        "Use cases",
        "WebDAV servers (e.g., Nginx WebDAV, Apache WebDAV), self-hosted Git "
        "web interfaces (Gitea, Gogs), or any HTTP Basic Auth protected web "
        "application.",
    ),
    (
        "Important",
        "Some servers keep the authentication only for the lifetime of the "
        "browser session. You may need to re-authenticate after restarting "
        "the browser completely.",
    ),
    (
        "Security notice",
        "Credentials are never stored, but quickauth reads your username and "
        "password in plain text when you enter them to construct the "
        "authentication URL, and the browser may show that URL. Only use it "
        "on your own device. Avoid shared or public computers.",
    ),
]


def about_command() -> None:
    """Show what quickauth does and its security caveats."""
    for i, (title, body) in enumerate(ABOUT_SECTIONS):
        if i:
            print_data("")
        print_data(f"{title}:")
        print_data(f"  {body}")
