"""Polling interval timer used for slideshow autoplay."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable


class AutoplayTimer:
    """
    Fixed-interval timer driven by the host event loop.

    No thread is started. The host calls :meth:`poll` whenever it gets
    control; at most one advance is reported per call and the next
    deadline is measured from that moment, so a stalled loop does not
    produce a burst of skips.
    """

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            msg = "interval must be positive"
            raise ValueError(msg)
        self._interval = interval
        self._clock = clock
        self._deadline: float | None = None

    @property
    def interval(self) -> float:
        """Seconds between advances."""
        return self._interval

    @property
    def running(self) -> bool:
        """Whether the timer is armed."""
        return self._deadline is not None

    def start(self) -> None:
        """Arm the timer; the first advance is one interval away."""
        self._deadline = self._clock() + self._interval

    def stop(self) -> None:
        """Disarm the timer."""
        self._deadline = None

    def toggle(self) -> bool:
        """Flip between running and stopped; return the new state."""
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running

    def restart(self) -> None:
        """Restart the countdown if running."""
        if self.running:
            self.start()

    def poll(self) -> bool:
        """Return True once per elapsed interval while running."""
        if self._deadline is None:
            return False
        now = self._clock()
        if now < self._deadline:
            return False
        self._deadline = now + self._interval
        return True
