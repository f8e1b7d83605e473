from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from .errors import CancelledError


class RequestContext:
    """
    Cancellation handle for client calls.

    A context may carry a deadline (`timeout` seconds from creation) and can be
    cancelled from another thread. Once done, either way, every response
    registered through `track()` is closed and every `wait()` returns.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._deadline = time.monotonic() + timeout if timeout else None
        self._done = threading.Event()
        self._reason = ""
        self._lock = threading.Lock()
        self._inflight: List[Any] = []
        self._waiters: List[threading.Event] = []
        self._timer: Optional[threading.Timer] = None
        if timeout:
            self._timer = threading.Timer(timeout, self._finish, args=("context deadline exceeded",))
            self._timer.daemon = True
            self._timer.start()

    @classmethod
    def background(cls) -> "RequestContext":
        return cls()

    @property
    def cancelled(self) -> bool:
        """True once the context was cancelled or its deadline passed."""
        if not self._done.is_set() and self._expired():
            self._finish("context deadline exceeded")
        return self._done.is_set()

    def cancel(self) -> None:
        self._finish("context canceled")

    def error(self) -> CancelledError:
        return CancelledError(self._reason or "context canceled")

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise self.error()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None when there is none."""
        self.raise_if_cancelled()
        if self._deadline is None:
            return None
        return self._deadline - time.monotonic()

    def wait(self, event: threading.Event) -> None:
        """Block until `event` is set or the context is done."""
        with self._lock:
            if self._done.is_set():
                return
            self._waiters.append(event)
        try:
            event.wait()
        finally:
            with self._lock:
                if event in self._waiters:
                    self._waiters.remove(event)

    @contextmanager
    def track(self, resp: Any) -> Iterator[Any]:
        with self._lock:
            self._inflight.append(resp)
        try:
            # the context may have finished between send and registration
            if self._done.is_set():
                resp.close()
            yield resp
        finally:
            with self._lock:
                self._inflight.remove(resp)

    def _expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def _finish(self, reason: str) -> None:
        with self._lock:
            if self._done.is_set():
                return
            self._reason = reason
            self._done.set()
            inflight = list(self._inflight)
            waiters = list(self._waiters)
        if self._timer is not None:
            self._timer.cancel()
        for resp in inflight:
            resp.close()
        for event in waiters:
            event.set()
