"""
Cancellation scopes for supervised processes.

A CancellationScope is a thread-safe "this work may be asked to stop" handle.
Work bound to a scope registers a callback; cancelling the scope fires every
registered callback exactly once.
"""

import threading
from typing import Callable, Dict, Optional


class CancellationScope:
    """
    Thread-safe cancellation handle.

    Cancelling is idempotent: only the first call to cancel() fires callbacks.
    A callback registered after cancellation fires immediately on the
    registering thread.

    Example:
        scope = CancellationScope()
        remove = scope.add_callback(process.terminate)
        ...
        scope.cancel()   # from another thread
        remove()         # when the work finishes first
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._next_key = 0

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """
        Cancel the scope and fire all registered callbacks.

        Callbacks run one at a time on the calling thread; cancel() returns
        once every callback has finished.
        """
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()

        # Fire outside the lock so callbacks may touch the scope
        for callback in callbacks:
            callback()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the scope is cancelled.

        Args:
            timeout: Seconds to wait (None waits forever)

        Returns:
            True if cancelled, False on timeout
        """
        return self._event.wait(timeout)

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback to fire on cancellation.

        Args:
            callback: Zero-argument callable

        Returns:
            Function that unregisters the callback (no-op once fired)
        """
        with self._lock:
            if not self._event.is_set():
                key = self._next_key
                self._next_key += 1
                self._callbacks[key] = callback
                return lambda: self._remove_callback(key)

        callback()
        return lambda: None

    def _remove_callback(self, key: int) -> None:
        with self._lock:
            self._callbacks.pop(key, None)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<CancellationScope {state}>"
