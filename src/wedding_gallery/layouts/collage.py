"""
Artistic collage templates.

Every template is a closed-form generator mapping (index, count,
container, draws) to a rectangle. ``draws`` are the per-image uniform
values from the jitter cache, so a template is pure for fixed inputs and
only changes on an explicit regenerate.

Positions are designed on a 700x500 reference canvas and scaled
uniformly to the container, centered.

Templates cap the number of images they place. Images past the cap are
reported in :attr:`LayoutResult.overflow` so the renderer can show a
"+N more" affordance; no template drops them silently.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wedding_gallery.constants import (
    CIRCLE_INNER_RADIUS,
    CIRCLE_INNER_SIZE,
    CIRCLE_OUTER_RADIUS,
    CIRCLE_OUTER_SIZE,
    CIRCLE_RING_CAPACITY,
    COLLAGE_CIRCLE_RADIUS,
    COLLAGE_CORNER_RADIUS_MAX,
    COLLAGE_REFERENCE_SIZE,
    COLLAGE_ROTATION_MAX,
    COLLAGE_Z_INDEX_MAX,
    GEOMETRIC_BASE_RADIUS,
    GEOMETRIC_BASE_SIZE,
    GEOMETRIC_RADIUS_STEP,
    GEOMETRIC_RING_OFFSET,
    GEOMETRIC_RING_SIZE,
    GEOMETRIC_SIZE_STEP,
    HEART_EXTENT,
    HEART_FILL,
    HEART_SIZE_RANGE,
    MOSAIC_ATTENUATION,
    MOSAIC_GRID,
    MOSAIC_JITTER,
    SCATTERED_SIZE_RANGE,
)
from wedding_gallery.layouts.core import (
    LayoutRequest,
    Rect,
    empty_result,
    lerp,
    place,
    signed,
)
from wedding_gallery.logging_utils import logger
from wedding_gallery.type_defs import LayoutKind, LayoutResult, Size

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

__all__ = [
    "COLLAGE_TEMPLATES",
    "DRAWS_PER_IMAGE",
    "CollageTemplate",
    "collage_position",
    "get_template",
    "layout_collage",
]

# position draws (3) followed by rotation, z-index and corner radius
DRAWS_PER_IMAGE = 6

Draws = tuple[float, ...]


def _scale(container: Size) -> float:
    ref_w, ref_h = COLLAGE_REFERENCE_SIZE
    return min(container.width / ref_w, container.height / ref_h)


def _center(container: Size) -> tuple[float, float]:
    return container.width / 2, container.height / 2


def heart_position(
    index: int,
    count: int,
    container: Size,
    draws: Draws,
) -> Rect:
    """Sample the parametric heart at ``t = i / (n - 1) * 2pi``."""
    t = index / max(count - 1, 1) * 2 * math.pi
    hx = 16 * math.sin(t) ** 3
    hy = (
        13 * math.cos(t)
        - 5 * math.cos(2 * t)
        - 2 * math.cos(3 * t)
        - math.cos(4 * t)
    )
    extent_w, extent_h = HEART_EXTENT
    curve_scale = HEART_FILL * min(
        container.width / extent_w, container.height / extent_h,
    )
    cx, cy = _center(container)
    size = lerp(*HEART_SIZE_RANGE, draws[0]) * _scale(container)
    # screen y grows downward
    return Rect.around(
        cx + curve_scale * hx, cy - curve_scale * hy, size, size,
    )


def circle_position(  # noqa: ARG001
    index: int,
    count: int,
    container: Size,
    draws: Draws,
) -> Rect:
    """Two concentric rings with equal spacing inside each ring."""
    ring, slot = divmod(index, CIRCLE_RING_CAPACITY)
    if ring == 0:
        in_ring = min(count, CIRCLE_RING_CAPACITY)
        radius, size = CIRCLE_INNER_RADIUS, CIRCLE_INNER_SIZE
    else:
        in_ring = min(count - CIRCLE_RING_CAPACITY, CIRCLE_RING_CAPACITY)
        radius, size = CIRCLE_OUTER_RADIUS, CIRCLE_OUTER_SIZE
    angle = slot * 2 * math.pi / max(in_ring, 1)
    s = _scale(container)
    cx, cy = _center(container)
    return Rect.around(
        cx + radius * s * math.cos(angle),
        cy + radius * s * math.sin(angle),
        size * s,
        size * s,
    )


def mosaic_position(  # noqa: ARG001
    index: int,
    count: int,
    container: Size,
    draws: Draws,
) -> Rect:
    """Fixed 5x4 grid with per-cell size attenuation and jitter."""
    cols, rows = MOSAIC_GRID
    row, col = divmod(index, cols)
    cell_w = container.width / cols
    cell_h = container.height / rows
    attenuation = lerp(*MOSAIC_ATTENUATION, draws[0])
    w, h = cell_w * attenuation, cell_h * attenuation
    jitter = MOSAIC_JITTER * _scale(container)
    x = col * cell_w + (cell_w - w) / 2 + signed(draws[1], jitter)
    y = row * cell_h + (cell_h - h) / 2 + signed(draws[2], jitter)
    return Rect(x, y, x + w, y + h)


def scattered_position(  # noqa: ARG001
    index: int,
    count: int,
    container: Size,
    draws: Draws,
) -> Rect:
    """Uniform placement fully inside the container."""
    size = lerp(*SCATTERED_SIZE_RANGE, draws[0]) * _scale(container)
    x = draws[1] * max(0.0, container.width - size)
    y = draws[2] * max(0.0, container.height - size)
    return Rect(x, y, x + size, y + size)


def geometric_position(  # noqa: ARG001
    index: int,
    count: int,
    container: Size,
    draws: Draws,
) -> Rect:
    """Concentric hexagonal rings, each rotated by 30 degrees."""
    layer, slot = divmod(index, GEOMETRIC_RING_SIZE)
    angle = (
        slot * 2 * math.pi / GEOMETRIC_RING_SIZE
        + layer * GEOMETRIC_RING_OFFSET
    )
    s = _scale(container)
    radius = (GEOMETRIC_BASE_RADIUS + layer * GEOMETRIC_RADIUS_STEP) * s
    size = (GEOMETRIC_BASE_SIZE + layer * GEOMETRIC_SIZE_STEP) * s
    cx, cy = _center(container)
    return Rect.around(
        cx + radius * math.cos(angle),
        cy + radius * math.sin(angle),
        size,
        size,
    )


@dataclass(frozen=True)
class CollageTemplate:
    """A named collage generator with its image cap."""

    id: str
    name: str
    description: str
    max_images: int
    position: Callable[[int, int, Size, Draws], Rect]


COLLAGE_TEMPLATES: dict[str, CollageTemplate] = {
    t.id: t
    for t in (
        CollageTemplate(
            "heart", "Heart Shape",
            "Romantic heart-shaped photo arrangement", 12, heart_position,
        ),
        CollageTemplate(
            "circle", "Circle Mandala",
            "Circular mandala pattern with overlapping photos", 16,
            circle_position,
        ),
        CollageTemplate(
            "mosaic", "Mosaic Grid",
            "Artistic mosaic with varied sizes", 20, mosaic_position,
        ),
        CollageTemplate(
            "scattered", "Scattered Art",
            "Organic scattered layout with natural flow", 15,
            scattered_position,
        ),
        CollageTemplate(
            "geometric", "Geometric",
            "Modern geometric pattern arrangement", 18, geometric_position,
        ),
    )
}

DEFAULT_TEMPLATE = "heart"


def get_template(template_id: str) -> CollageTemplate:
    """Look up a template, falling back to the heart."""
    template = COLLAGE_TEMPLATES.get(template_id)
    if template is None:
        logger.warning(
            "Unknown collage template %r; using %s",
            template_id, DEFAULT_TEMPLATE,
        )
        template = COLLAGE_TEMPLATES[DEFAULT_TEMPLATE]
    return template


def collage_position(
    template_id: str,
    index: int,
    count: int,
    container: Size,
    draws: Draws,
) -> Rect:
    """Rectangle for image ``index`` of ``count`` in a template."""
    template = get_template(template_id)
    placed = min(count, template.max_images)
    return template.position(index, placed, container, draws)


def layout_collage(request: LayoutRequest) -> LayoutResult:
    """Arrange up to ``max_images`` images in the requested template."""
    if not request.images:
        return empty_result(LayoutKind.COLLAGE)
    template = get_template(request.template)
    placed = request.images[:template.max_images]
    overflow = tuple(img.id for img in request.images[template.max_images:])
    if overflow:
        logger.debug(
            "Collage %s placed %d of %d images",
            template.id, len(placed), len(request.images),
        )

    salt = f"collage:{template.id}"
    items = []
    for i, img in enumerate(placed):
        draws = request.jitter.uniform(img.id, salt, DRAWS_PER_IMAGE)
        box = template.position(i, len(placed), request.container, draws)
        if template.id == "circle":
            corner = COLLAGE_CIRCLE_RADIUS
        else:
            corner = draws[5] * COLLAGE_CORNER_RADIUS_MAX
        items.append(
            place(
                img.id,
                box,
                rotation=signed(draws[3], COLLAGE_ROTATION_MAX),
                z_index=min(int(draws[4] * COLLAGE_Z_INDEX_MAX),
                            COLLAGE_Z_INDEX_MAX - 1),
                border_radius=corner,
            ),
        )
    return LayoutResult(
        kind=LayoutKind.COLLAGE,
        items=tuple(items),
        sequence=request.ids,
        canvas=request.container,
        overflow=overflow,
    )
