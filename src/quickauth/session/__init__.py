"""Session establishment: URL matching, bounded polling, and the helper itself."""

from quickauth.session.helper import AUTHENTICATED_NOTICE, SessionHelper
from quickauth.session.matching import (
    build_auth_url,
    find_matching_view,
    is_valid_url,
    normalize_url,
    urls_match,
)
from quickauth.session.polling import (
    BoundedPoller,
    PollOutcome,
    Scheduler,
    ThreadingScheduler,
)

__all__ = [
    "AUTHENTICATED_NOTICE",
    "BoundedPoller",
    "PollOutcome",
    "Scheduler",
    "SessionHelper",
    "ThreadingScheduler",
    "build_auth_url",
    "find_matching_view",
    "is_valid_url",
    "normalize_url",
    "urls_match",
]
