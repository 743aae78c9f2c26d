"""
Viewport breakpoints and the layout parameters derived from them.

Resize handling is single-threaded: the host forwards every resize to
:class:`ResizeDebouncer` and calls :meth:`ResizeDebouncer.poll` from its
event loop. A re-layout is requested once per breakpoint crossing, not
once per pixel.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from wedding_gallery.config_defaults import (
    DEFAULT_MOBILE_MAX_WIDTH,
    DEFAULT_RESIZE_DEBOUNCE_SECONDS,
    DEFAULT_TABLET_MAX_WIDTH,
)
from wedding_gallery.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from wedding_gallery.config import ResponsiveConfig

__all__ = [
    "Breakpoint",
    "BreakpointThresholds",
    "ResizeDebouncer",
]


class Breakpoint(StrEnum):
    """Named viewport-width bucket."""

    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"

    @classmethod
    def from_width(
        cls,
        width: float,
        thresholds: BreakpointThresholds | None = None,
    ) -> Breakpoint:
        """Bucket a viewport width."""
        limits = thresholds or BreakpointThresholds()
        if width < limits.mobile_max:
            return cls.MOBILE
        if width < limits.tablet_max:
            return cls.TABLET
        return cls.DESKTOP

    @property
    def grid_columns(self) -> int:
        """Columns for grid, masonry and polaroid layouts."""
        return _GRID_COLUMNS[self]

    @property
    def thumbnail_columns(self) -> int:
        """Columns for the lightbox thumbnail strip."""
        return _THUMBNAIL_COLUMNS[self]

    @property
    def visible_count(self) -> int:
        """Images visible at once in the multi-image carousel."""
        return _VISIBLE_COUNT[self]


_GRID_COLUMNS = {
    Breakpoint.MOBILE: 2,
    Breakpoint.TABLET: 3,
    Breakpoint.DESKTOP: 4,
}
_THUMBNAIL_COLUMNS = {
    Breakpoint.MOBILE: 3,
    Breakpoint.TABLET: 5,
    Breakpoint.DESKTOP: 6,
}
_VISIBLE_COUNT = {
    Breakpoint.MOBILE: 1,
    Breakpoint.TABLET: 2,
    Breakpoint.DESKTOP: 3,
}


@dataclass(frozen=True, slots=True)
class BreakpointThresholds:
    """Exclusive upper widths for the mobile and tablet buckets."""

    mobile_max: int = DEFAULT_MOBILE_MAX_WIDTH
    tablet_max: int = DEFAULT_TABLET_MAX_WIDTH

    @classmethod
    def from_config(cls, config: ResponsiveConfig) -> BreakpointThresholds:
        """Build thresholds from the responsive config section."""
        return cls(config.mobile_max_width, config.tablet_max_width)


class ResizeDebouncer:
    """
    Collapse bursts of resize events into breakpoint changes.

    ``resize`` only records the latest width. ``poll`` commits it once
    the quiet period has elapsed and returns the new breakpoint if, and
    only if, the bucket changed.
    """

    def __init__(  # noqa: PLR0913
        self,
        width: float,
        *,
        thresholds: BreakpointThresholds | None = None,
        delay: float = DEFAULT_RESIZE_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        on_change: Callable[[Breakpoint], None] | None = None,
    ) -> None:
        self._thresholds = thresholds or BreakpointThresholds()
        self._delay = delay
        self._clock = clock
        self._on_change = on_change
        self._width = width
        self._breakpoint = Breakpoint.from_width(width, self._thresholds)
        self._pending: float | None = None
        self._pending_since = 0.0

    @property
    def breakpoint(self) -> Breakpoint:
        """Committed breakpoint."""
        return self._breakpoint

    @property
    def width(self) -> float:
        """Last committed width."""
        return self._width

    def resize(self, width: float) -> None:
        """Record a raw resize event."""
        self._pending = width
        self._pending_since = self._clock()

    def poll(self) -> Breakpoint | None:
        """Commit a settled resize; return the breakpoint if it changed."""
        if self._pending is None:
            return None
        if self._clock() - self._pending_since < self._delay:
            return None
        return self.flush()

    def flush(self) -> Breakpoint | None:
        """Commit any pending resize immediately."""
        if self._pending is None:
            return None
        self._width = self._pending
        self._pending = None
        new_bp = Breakpoint.from_width(self._width, self._thresholds)
        if new_bp == self._breakpoint:
            return None
        logger.debug(
            "Breakpoint changed %s -> %s at width %s",
            self._breakpoint.value, new_bp.value, self._width,
        )
        self._breakpoint = new_bp
        if self._on_change is not None:
            self._on_change(new_bp)
        return new_bp
