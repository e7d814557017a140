"""Send quota limiting the number of QoS 1/2 publishes in flight."""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Optional

_CANCEL_POLL = 0.005


class UnexpectedReleaseError(Exception):
    """Release was called while the quota was already at its initial value."""

    def __init__(self) -> None:
        super().__init__("release called when quota at initial value")


class QuotaCancelledError(Exception):
    """Waiting for a slot was cancelled."""

    def __init__(self) -> None:
        super().__init__("waiting for send quota cancelled")


class SendQuota:
    """Counting limiter whose waiters are served in arrival order.

    Releasing beyond the initial quota is reported rather than allowed,
    since a broker may acknowledge a message the local session does not know.
    """

    def __init__(self, quota: int) -> None:
        self._lock = threading.Lock()
        self._initial = quota
        self._quota = quota
        self._waiters: deque[threading.Event] = deque()

    @property
    def quota(self) -> int:
        """The number of free slots (negative after forced retransmits)."""
        with self._lock:
            return self._quota

    @property
    def waiting(self) -> int:
        """The number of callers blocked waiting for a slot."""
        with self._lock:
            return len(self._waiters)

    def retransmit(self) -> None:
        """Take a slot for a resent message without ever blocking."""
        self._acquire(None, None, no_wait=True)

    def acquire(
        self,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        """Wait for a free slot.

        A free slot is taken even if cancel is already set. Raises
        TimeoutError after timeout seconds and QuotaCancelledError once
        cancel is set, unless a slot was granted in the meantime.
        """
        self._acquire(timeout, cancel, no_wait=False)

    def _acquire(
        self,
        timeout: Optional[float],
        cancel: Optional[threading.Event],
        no_wait: bool,
    ) -> None:
        with self._lock:
            if no_wait or (self._quota > 0 and not self._waiters):
                self._quota -= 1
                return
            ready = threading.Event()
            self._waiters.append(ready)

        deadline = None if timeout is None else time.monotonic() + timeout
        failure: Exception
        while True:
            if ready.is_set():
                return
            if cancel is not None and cancel.is_set():
                failure = QuotaCancelledError()
                break
            wait_for: Optional[float] = None
            if deadline is not None:
                wait_for = deadline - time.monotonic()
                if wait_for <= 0:
                    failure = TimeoutError("timed out waiting for send quota")
                    break
            if cancel is not None:
                wait_for = _CANCEL_POLL if wait_for is None else min(wait_for, _CANCEL_POLL)
            ready.wait(wait_for)

        with self._lock:
            if ready.is_set():
                # Granted after giving up; keep the slot rather than repair the queue.
                return
            self._waiters.remove(ready)
        raise failure

    def release(self) -> None:
        """Free a slot, handing it to the longest waiting caller if any."""
        with self._lock:
            if self._quota >= 0 and self._waiters:
                self._waiters.popleft().set()
                return
            if self._quota < self._initial:
                self._quota += 1
                return
        raise UnexpectedReleaseError()