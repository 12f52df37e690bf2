"""Bounded retry on top of deferred callbacks.

:class:`BoundedPoller` runs an *attempt* function at most
``policy.max_attempts`` times. The first run happens ``initial_delay``
seconds after :meth:`~BoundedPoller.start`, and each later run happens
``interval`` seconds after the previous one. Every run is a separate
callback on a :class:`Scheduler`; nothing blocks between attempts and
:meth:`~BoundedPoller.start` returns immediately.

The scheduler is injected so the retry policy can be driven by a thread
timer in the CLI, by an event loop when embedded, or by a fake clock in
tests.
"""

from __future__ import annotations

import enum
import functools
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from quickauth.models import PollingConfig

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Runs callbacks after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run *callback* once, *delay* seconds from now."""
        ...


class ThreadingScheduler(Scheduler):
    """Scheduler backed by :class:`threading.Timer`.

    Timer threads are daemons, so a CLI command calls :meth:`wait` before
    exiting to let in-flight polling finish.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._pending = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        def _run() -> None:
            try:
                callback()
            finally:
                with self._cond:
                    self._pending -= 1
                    self._cond.notify_all()

        timer = threading.Timer(delay, _run)
        timer.daemon = True
        with self._cond:
            self._pending += 1
        timer.start()

    @property
    def pending(self) -> int:
        """Number of callbacks scheduled but not yet finished."""
        with self._cond:
            return self._pending

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no callbacks are pending.

        Callbacks scheduled from inside a running callback are counted before
        the running one finishes, so a chain of retries is waited for as a
        whole.

        Returns:
            ``True`` if everything finished, ``False`` on timeout.
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)


class PollOutcome(str, enum.Enum):
    """Terminal state of a :class:`BoundedPoller`."""

    PENDING = "pending"
    MATCHED = "matched"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class BoundedPoller:
    """Call *attempt* until it returns a truthy value or the budget runs out.

    Args:
        policy: Initial delay, attempt budget and interval.
        scheduler: Where each attempt is scheduled.
        attempt: Called with the 1-based attempt number. A truthy return
            ends polling with :attr:`PollOutcome.MATCHED`. An exception ends
            polling with :attr:`PollOutcome.FAILED`; it is logged at debug
            level and never re-raised.

    Example::

        poller = BoundedPoller(PollingConfig(), ThreadingScheduler(), check)
        poller.start()
    """

    def __init__(
        self,
        policy: PollingConfig,
        scheduler: Scheduler,
        attempt: Callable[[int], bool],
    ) -> None:
        self._policy = policy
        self._scheduler = scheduler
        self._attempt = attempt
        self._started = False
        self.attempts = 0
        self.outcome = PollOutcome.PENDING

    @property
    def done(self) -> bool:
        return self.outcome is not PollOutcome.PENDING

    def start(self) -> None:
        """Schedule the first attempt after ``policy.initial_delay``.

        Raises:
            RuntimeError: If the poller was already started.
        """
        if self._started:
            raise RuntimeError("Poller already started")
        self._started = True
        self._schedule(self._policy.initial_delay, 1)

    def _schedule(self, delay: float, number: int) -> None:
        self._scheduler.call_later(delay, functools.partial(self._run, number))

    def _run(self, number: int) -> None:
        self.attempts = number
        try:
            matched = self._attempt(number)
        except Exception:
            logger.debug("Polling attempt %d failed", number, exc_info=True)
            self.outcome = PollOutcome.FAILED
            return

        if matched:
            self.outcome = PollOutcome.MATCHED
        elif number < self._policy.max_attempts:
            self._schedule(self._policy.interval, number + 1)
        else:
            self.outcome = PollOutcome.EXHAUSTED
