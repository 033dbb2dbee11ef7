"""Cancellation and deadlines for blocking client calls.

Every client operation takes an optional ``ctx``. The retry loop checks it
before each attempt and sleeps through it, so ``cancel()`` from another
thread (or an expired deadline) stops an operation without waiting out a
backoff.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from honeycombio.errors import ContextCancelled, DeadlineExceeded


class Context:
    """A cancellation token with an optional deadline."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._done = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._done.set()

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def err(self) -> Optional[ContextCancelled]:
        """The reason this context is done, or None while it is live."""
        if self._done.is_set():
            return ContextCancelled("context canceled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded("context deadline exceeded")
        return None

    def sleep(self, seconds: float) -> bool:
        """Block for ``seconds`` or until the context is done.

        Returns True when the full wait elapsed with the context still live.
        """
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._done.wait(remaining)
            return False
        self._done.wait(max(seconds, 0.0))
        return self.err() is None


def background() -> Context:
    """A context that is never cancelled and has no deadline."""
    return Context()
