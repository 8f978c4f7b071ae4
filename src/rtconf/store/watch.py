# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Watch registry: per-path waiters released by updates.

Each blocked watch() call owns a WatchHandle, a one-shot event tied to a
normalized path. An update on that exact path detaches the path's whole
handle list and cancels every handle in it; a waiter whose timeout expires
removes only its own handle. Handles registered after a notification are
new objects, so they never observe an earlier signal.

Example:
    >>> registry = WatchRegistry()
    >>> handle = registry.register('a/b')
    >>> registry.notify('a/b')
    1
    >>> handle.wait(0)
    True
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class WatchHandle:
    """Cancellation handle for a single waiting watch() call."""

    __slots__ = ('path', '_event')

    def __init__(self, path: str) -> None:
        self.path = path
        self._event = threading.Event()

    def __repr__(self) -> str:
        state = 'cancelled' if self.cancelled else 'waiting'
        return f"WatchHandle({self.path!r}, {state})"

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Release the waiter."""
        self._event.set()

    def wait(self, timeout: float | None) -> bool:
        """Block until cancelled or timeout; True if cancelled."""
        return self._event.wait(timeout)


class WatchRegistry:
    """Thread-safe mapping from normalized path to pending handles.

    The internal lock only guards the mapping; it is never held while a
    caller is waiting on a handle.
    """

    __slots__ = ('_lock', '_handles')

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handles: dict[str, list[WatchHandle]] = {}

    def __len__(self) -> int:
        """Return the number of paths with pending watchers."""
        with self._lock:
            return len(self._handles)

    def register(self, path: str) -> WatchHandle:
        """Create a handle for path and add it to the registry."""
        handle = WatchHandle(path)
        with self._lock:
            self._handles.setdefault(path, []).append(handle)
        logger.debug("watch registered on %r", path)
        return handle

    def discard(self, handle: WatchHandle) -> None:
        """Remove handle if it is still registered."""
        with self._lock:
            handles = self._handles.get(handle.path)
            if handles is None:
                return
            try:
                handles.remove(handle)
            except ValueError:
                return
            if not handles:
                del self._handles[handle.path]

    def notify(self, path: str) -> int:
        """Cancel every handle on path and drop its entry.

        Returns:
            Number of waiters released.
        """
        with self._lock:
            handles = self._handles.pop(path, [])
        for handle in handles:
            handle.cancel()
        if handles:
            logger.debug("released %d watcher(s) on %r", len(handles), path)
        return len(handles)

    def count(self, path: str) -> int:
        """Return the number of handles pending on path."""
        with self._lock:
            return len(self._handles.get(path, ()))

    def wait(self, path: str, timeout: float | None) -> bool:
        """Register on path and block until notified or timeout.

        Returns:
            True if released by notify(), False if the timeout elapsed.
        """
        handle = self.register(path)
        try:
            notified = handle.wait(timeout)
        finally:
            self.discard(handle)
        if not notified:
            logger.debug("watch on %r expired after %ss", path, timeout)
        return notified
