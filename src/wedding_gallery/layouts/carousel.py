"""Single and multi-image carousels over the filtered sequence."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wedding_gallery.config_defaults import DEFAULT_SWIPE_THRESHOLD
from wedding_gallery.constants import (
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_SPACE_ALIASES,
)
from wedding_gallery.layouts.core import (
    LayoutRequest,
    Rect,
    bounding_size,
    column_width,
    empty_result,
    place,
)
from wedding_gallery.type_defs import LayoutKind, LayoutResult

if TYPE_CHECKING:  # pragma: no cover
    from wedding_gallery.viewer.autoplay import AutoplayTimer

__all__ = [
    "CarouselWindow",
    "layout_multi_carousel",
    "layout_single_carousel",
]


class CarouselWindow:
    """
    Visible window ``[start, start + visible_count)`` over a sequence.

    The window is circular: ``next`` and ``prev`` move ``start`` by one
    modulo the sequence length and the window itself wraps past the end.
    The effective visible count never exceeds the sequence length.
    """

    def __init__(
        self,
        count: int,
        visible_count: int = 1,
        start: int = 0,
        *,
        autoplay: AutoplayTimer | None = None,
    ) -> None:
        self._count = max(0, count)
        self._visible = max(1, visible_count)
        self._start = start % self._count if self._count else 0
        self._autoplay = autoplay

    @property
    def count(self) -> int:
        """Length of the underlying sequence."""
        return self._count

    @property
    def start(self) -> int:
        """Index of the first visible item."""
        return self._start

    @property
    def visible_count(self) -> int:
        """Items visible at once, capped by the sequence length."""
        return min(self._visible, self._count)

    @property
    def autoplay(self) -> AutoplayTimer | None:
        """Optional auto-slide timer."""
        return self._autoplay

    @property
    def playing(self) -> bool:
        """Whether auto-slide is running."""
        return self._autoplay is not None and self._autoplay.running

    def visible_indices(self) -> list[int]:
        """Indices currently on screen, in display order."""
        return [
            (self._start + k) % self._count
            for k in range(self.visible_count)
        ]

    def next(self) -> int:
        """Advance by one with wraparound, restarting any autoplay."""
        self._move(1)
        self._restart_autoplay()
        return self._start

    def prev(self) -> int:
        """Step back by one with wraparound, restarting any autoplay."""
        self._move(-1)
        self._restart_autoplay()
        return self._start

    def _move(self, delta: int) -> None:
        if self._count:
            self._start = (self._start + delta) % self._count

    def resize(self, visible_count: int) -> None:
        """Apply a new breakpoint's visible count."""
        self._visible = max(1, visible_count)

    def set_count(self, count: int) -> None:
        """Follow a change in the sequence length, keeping ``start`` valid."""
        self._count = max(0, count)
        self._start = self._start % self._count if self._count else 0

    def toggle_autoplay(self) -> bool:
        """Play or pause auto-slide; return the new state."""
        if self._autoplay is None:
            return False
        return self._autoplay.toggle()

    def handle_key(self, key: str) -> bool:
        """
        Arrow keys page the carousel and Space toggles auto-slide.

        Returns True if the key was consumed.
        """
        if key == KEY_ARROW_LEFT:
            self.prev()
        elif key == KEY_ARROW_RIGHT:
            self.next()
        elif key in KEY_SPACE_ALIASES and self._autoplay is not None:
            self.toggle_autoplay()
        else:
            return False
        return True

    def swipe(
        self,
        start_x: float,
        end_x: float,
        threshold: float = DEFAULT_SWIPE_THRESHOLD,
    ) -> bool:
        """Left swipe advances, right swipe goes back."""
        distance = start_x - end_x
        if abs(distance) <= threshold:
            return False
        if distance > 0:
            self.next()
        else:
            self.prev()
        return True

    def tick(self) -> bool:
        """Auto-slide when due and there is something off screen."""
        if self._autoplay is None or self._count <= self.visible_count:
            return False
        if self._autoplay.poll():
            self._move(1)
            return True
        return False

    def _restart_autoplay(self) -> None:
        if self._autoplay is not None:
            self._autoplay.restart()


def _strip(
    kind: LayoutKind,
    request: LayoutRequest,
    visible_count: int,
    slot_height: float | None,
) -> LayoutResult:
    if not request.images:
        return empty_result(kind)
    window = CarouselWindow(
        len(request.images), visible_count, request.carousel_start,
    )
    slots = window.visible_count
    slot_w = column_width(request.container.width, slots, request.gap)
    slot_h = slot_w if slot_height is None else slot_height
    n = window.count
    items = []
    for i, img in enumerate(request.images):
        offset = (i - window.start) % n
        x = offset * (slot_w + request.gap)
        items.append(
            place(
                img.id,
                Rect(x, 0, x + slot_w, slot_h),
                z_index=n - offset,
                visible=offset < slots,
            ),
        )
    visible_items = [item for item in items if item.visible]
    return LayoutResult(
        kind=kind,
        items=tuple(items),
        sequence=request.ids,
        canvas=bounding_size(visible_items),
    )


def layout_single_carousel(request: LayoutRequest) -> LayoutResult:
    """One full-width slide at a time."""
    return _strip(
        LayoutKind.SINGLE_CAROUSEL, request, 1, request.container.height,
    )


def layout_multi_carousel(request: LayoutRequest) -> LayoutResult:
    """Square slides, ``breakpoint.visible_count`` at a time."""
    return _strip(
        LayoutKind.MULTI_CAROUSEL,
        request,
        request.breakpoint.visible_count,
        None,
    )
