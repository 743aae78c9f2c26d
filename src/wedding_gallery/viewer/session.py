"""
Scoped acquisition of page-wide UI state for a modal viewer.

Opening a full-screen viewer locks background scrolling and attaches a
window-level key listener. Both are global, so they are owned by a
:class:`ModalSession` whose release runs on every exit path and is safe
to call more than once.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Protocol

from wedding_gallery.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable
    from types import TracebackType


class ViewerHost(Protocol):
    """Subset of the presentation layer the viewer relies on."""

    def set_scroll_locked(self, locked: bool) -> None:  # noqa: FBT001
        """Enable or disable background page scrolling."""
        ...

    def add_key_listener(self, listener: Callable[[str], None]) -> None:
        """Route window key presses to ``listener``."""
        ...

    def remove_key_listener(self, listener: Callable[[str], None]) -> None:
        """Stop routing key presses to ``listener``."""
        ...


class RecordingHost:
    """In-memory host that records what a viewer did to it."""

    def __init__(self) -> None:
        self.scroll_locked = False
        self.listeners: list[Callable[[str], None]] = []
        self.calls: list[tuple[str, object]] = []

    def set_scroll_locked(self, locked: bool) -> None:  # noqa: FBT001
        self.scroll_locked = locked
        self.calls.append(("set_scroll_locked", locked))

    def add_key_listener(self, listener: Callable[[str], None]) -> None:
        self.listeners.append(listener)
        self.calls.append(("add_key_listener", listener))

    def remove_key_listener(self, listener: Callable[[str], None]) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)
        self.calls.append(("remove_key_listener", listener))

    def press(self, key: str) -> None:
        """Deliver ``key`` to every attached listener."""
        for listener in list(self.listeners):
            listener(key)


class ScrollLock:
    """
    Reference-counted scroll lock over a host.

    Nested sessions (a viewer opened from inside another modal) each
    acquire once; scrolling comes back only when the last one releases.
    """

    def __init__(self, host: ViewerHost) -> None:
        self._host = host
        self._depth = 0

    @property
    def depth(self) -> int:
        """Number of outstanding acquisitions."""
        return self._depth

    def acquire(self) -> None:
        """Lock scrolling, counting nested acquisitions."""
        if self._depth == 0:
            self._host.set_scroll_locked(True)
        self._depth += 1

    def release(self) -> None:
        """Undo one acquisition; unlock when none remain."""
        if self._depth == 0:
            return
        self._depth -= 1
        if self._depth == 0:
            self._host.set_scroll_locked(False)


_LOCKS: weakref.WeakKeyDictionary[ViewerHost, ScrollLock] = (
    weakref.WeakKeyDictionary()
)


def scroll_lock_for(host: ViewerHost) -> ScrollLock:
    """Shared :class:`ScrollLock` for ``host``."""
    lock = _LOCKS.get(host)
    if lock is None:
        lock = _LOCKS[host] = ScrollLock(host)
    return lock


class ModalSession:
    """
    Guard holding the scroll lock and key listener of one open viewer.

    Use as a context manager or call :meth:`open`/:meth:`close`
    directly; ``close`` is idempotent.
    """

    def __init__(
        self,
        host: ViewerHost,
        on_key: Callable[[str], None],
    ) -> None:
        self._host = host
        self._on_key = on_key
        self._lock = scroll_lock_for(host)
        self._active = False

    @property
    def active(self) -> bool:
        """Whether the session currently holds host state."""
        return self._active

    def open(self) -> None:
        """Acquire the scroll lock and attach the key listener."""
        if self._active:
            return
        self._lock.acquire()
        try:
            self._host.add_key_listener(self._on_key)
        except Exception:
            self._lock.release()
            raise
        self._active = True
        logger.debug("Modal session opened (depth %d)", self._lock.depth)

    def close(self) -> None:
        """Detach the listener and release the scroll lock."""
        if not self._active:
            return
        self._active = False
        try:
            self._host.remove_key_listener(self._on_key)
        finally:
            self._lock.release()
        logger.debug("Modal session closed (depth %d)", self._lock.depth)

    def __enter__(self) -> ModalSession:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
