"""
Masonry layout: greedy shortest-column-first assignment.

Each image gets one height from :data:`MASONRY_HEIGHTS`, drawn once per
image id and reused until an explicit regenerate. Images are visited in
sequence order and appended to the column with the smallest accumulated
height (lowest index on ties); that column then grows by the image
height plus the gap. The result is a local greedy bound, not an optimal
packing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wedding_gallery.constants import MASONRY_HEIGHTS
from wedding_gallery.layouts.core import (
    LayoutRequest,
    Rect,
    column_width,
    empty_result,
    place,
)
from wedding_gallery.type_defs import LayoutKind, LayoutResult, Size

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from wedding_gallery.layouts.core import JitterCache

_SALT = "masonry-height"


@dataclass(frozen=True, slots=True)
class MasonryPlan:
    """Column assignment before pixel placement."""

    columns: tuple[tuple[str, ...], ...]
    column_heights: tuple[float, ...]
    # (image_id, column, y, height) in visiting order
    assignments: tuple[tuple[str, int, float, float], ...]

    @property
    def column_sizes(self) -> tuple[int, ...]:
        """Number of images per column."""
        return tuple(len(col) for col in self.columns)


def image_height(jitter: JitterCache, image_id: str) -> float:
    """Stable per-id height from the bounded set."""
    return jitter.choice(image_id, _SALT, MASONRY_HEIGHTS)


def distribute(
    image_ids: Sequence[str],
    heights: Sequence[float],
    columns: int,
    gap: float,
) -> MasonryPlan:
    """Assign each id to the currently shortest column."""
    n_cols = max(1, columns)
    col_ids: list[list[str]] = [[] for _ in range(n_cols)]
    col_heights = [0.0] * n_cols
    assignments: list[tuple[str, int, float, float]] = []
    for image_id, height in zip(image_ids, heights, strict=True):
        shortest = min(range(n_cols), key=col_heights.__getitem__)
        assignments.append((image_id, shortest, col_heights[shortest], height))
        col_ids[shortest].append(image_id)
        col_heights[shortest] += height + gap
    return MasonryPlan(
        columns=tuple(tuple(ids) for ids in col_ids),
        column_heights=tuple(col_heights),
        assignments=tuple(assignments),
    )


def plan_masonry(request: LayoutRequest) -> MasonryPlan:
    """Column plan for ``request`` using cached per-id heights."""
    heights = [image_height(request.jitter, img.id) for img in request.images]
    return distribute(
        request.ids, heights, request.breakpoint.grid_columns, request.gap,
    )


def layout_masonry(request: LayoutRequest) -> LayoutResult:
    """Place images into breakpoint-dependent masonry columns."""
    if not request.images:
        return empty_result(LayoutKind.MASONRY)
    plan = plan_masonry(request)
    n_cols = len(plan.columns)
    col_w = column_width(request.container.width, n_cols, request.gap)
    items = tuple(
        place(
            image_id,
            Rect(
                col * (col_w + request.gap),
                y,
                col * (col_w + request.gap) + col_w,
                y + height,
            ),
            z_index=i,
        )
        for i, (image_id, col, y, height) in enumerate(plan.assignments)
    )
    tallest = max(plan.column_heights) - request.gap
    return LayoutResult(
        kind=LayoutKind.MASONRY,
        items=items,
        sequence=request.ids,
        canvas=Size(request.container.width, max(0.0, tallest)),
    )
