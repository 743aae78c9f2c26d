"""Core geometry primitives and shared request types for layout passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wedding_gallery import random_utils as wg_random
from wedding_gallery.config_defaults import (
    DEFAULT_COLLAGE_TEMPLATE,
    DEFAULT_CONTAINER_HEIGHT,
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_GAP,
)
from wedding_gallery.responsive import Breakpoint
from wedding_gallery.type_defs import LaidOutItem, LayoutResult, Size

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

    from wedding_gallery.type_defs import (
        GalleryEvent,
        GalleryImage,
        LayoutKind,
    )


@dataclass(frozen=True)
class Rect:
    """Simple rectangle with convenience accessors."""

    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def w(self) -> float:
        """Width."""
        return self.x1 - self.x0

    @property
    def h(self) -> float:
        """Height."""
        return self.y1 - self.y0

    def translate(self, dx: float, dy: float) -> Rect:
        """Return a copy shifted by (dx, dy)."""
        return Rect(self.x0 + dx, self.y0 + dy, self.x1 + dx, self.y1 + dy)

    @classmethod
    def around(cls, cx: float, cy: float, w: float, h: float) -> Rect:
        """Rectangle of size (w, h) centered on (cx, cy)."""
        return cls(cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2)


def place(  # noqa: PLR0913
    image_id: str,
    box: Rect,
    *,
    rotation: float = 0.0,
    z_index: int = 0,
    visible: bool = True,
    border_radius: float = 0.0,
) -> LaidOutItem:
    """Build a :class:`LaidOutItem` from a rectangle."""
    return LaidOutItem(
        image_id=image_id,
        x=box.x0,
        y=box.y0,
        width=box.w,
        height=box.h,
        rotation=rotation,
        z_index=z_index,
        visible=visible,
        border_radius=border_radius,
    )


def bounding_size(items: Iterable[LaidOutItem]) -> Size:
    """Extent from the origin to the furthest item edge."""
    max_x = 0.0
    max_y = 0.0
    for item in items:
        max_x = max(max_x, item.x + item.width)
        max_y = max(max_y, item.y + item.height)
    return Size(max_x, max_y)


def column_width(container_width: float, columns: int, gap: float) -> float:
    """Width of one column after subtracting inner gaps."""
    if columns <= 0:
        return 0.0
    usable = container_width - gap * (columns - 1)
    return max(0.0, usable / columns)


def square_cells(
    count: int,
    columns: int,
    container_width: float,
    gap: float,
) -> list[Rect]:
    """Row-major square cells filling ``columns`` across the container."""
    edge = column_width(container_width, columns, gap)
    cells: list[Rect] = []
    for i in range(count):
        row, col = divmod(i, columns)
        x = col * (edge + gap)
        y = row * (edge + gap)
        cells.append(Rect(x, y, x + edge, y + edge))
    return cells


class JitterCache:
    """
    Per-image random draws, computed once per generation.

    Draws come from :func:`random_utils.rng_for`, so they are stable for
    an image id across layout passes, category changes and breakpoint
    changes. Only :meth:`regenerate` (explicit shuffle or regenerate)
    produces new values. A cache built with a ``seed`` never reads the
    process-wide seed, so sessions with different seeds stay independent.
    """

    def __init__(
        self, generation: int = 0, *, seed: int | None = None,
    ) -> None:
        self._generation = generation
        self._seed = seed
        self._draws: dict[tuple[str, str], tuple[float, ...]] = {}

    @property
    def generation(self) -> int:
        """Current regenerate counter."""
        return self._generation

    @property
    def seed(self) -> int | None:
        """Base seed, or None to follow the global one."""
        return self._seed

    def uniform(
        self, image_id: str, salt: str, count: int,
    ) -> tuple[float, ...]:
        """Return ``count`` floats in [0, 1) for (image_id, salt)."""
        key = (salt, image_id)
        cached = self._draws.get(key)
        if cached is None or len(cached) < count:
            rng = wg_random.rng_for(
                image_id,
                salt=salt,
                generation=self._generation,
                seed=self._seed,
            )
            cached = tuple(float(v) for v in rng.random(count))
            self._draws[key] = cached
        return cached[:count]

    def choice(
        self, image_id: str, salt: str, options: Sequence[float],
    ) -> float:
        """Pick one of ``options`` for (image_id, salt)."""
        (u,) = self.uniform(image_id, salt, 1)
        return options[min(int(u * len(options)), len(options) - 1)]

    def regenerate(self) -> int:
        """Discard all draws and advance the generation."""
        self._generation += 1
        self._draws.clear()
        return self._generation


def lerp(lo: float, hi: float, u: float) -> float:
    """Map ``u`` in [0, 1) onto [lo, hi)."""
    return lo + (hi - lo) * u


def signed(u: float, magnitude: float) -> float:
    """Map ``u`` in [0, 1) onto [-magnitude, magnitude)."""
    return (u - 0.5) * 2 * magnitude


@dataclass(frozen=True)
class LayoutRequest:
    """Inputs for one layout pass."""

    images: tuple[GalleryImage, ...]
    breakpoint: Breakpoint = Breakpoint.DESKTOP
    container: Size = field(
        default_factory=lambda: Size(
            DEFAULT_CONTAINER_WIDTH, DEFAULT_CONTAINER_HEIGHT,
        ),
    )
    gap: float = DEFAULT_GAP
    template: str = DEFAULT_COLLAGE_TEMPLATE
    carousel_start: int = 0
    events: tuple[GalleryEvent, ...] = ()
    expanded_section: str | None = None
    jitter: JitterCache = field(default_factory=JitterCache)

    @property
    def ids(self) -> tuple[str, ...]:
        """Image ids in input order."""
        return tuple(img.id for img in self.images)


def empty_result(kind: LayoutKind) -> LayoutResult:
    """Explicit empty state for a layout with no images."""
    return LayoutResult(kind=kind)
