"""Polaroid scatter: grid-seated cards with bounded rotation and offset."""

from __future__ import annotations

from wedding_gallery.constants import (
    POLAROID_CARD_SIZE,
    POLAROID_OFFSET_JITTER,
    POLAROID_POSITIONS,
    POLAROID_ROTATION_JITTER,
    POLAROID_ROTATIONS,
)
from wedding_gallery.layouts.core import (
    LayoutRequest,
    Rect,
    bounding_size,
    column_width,
    empty_result,
    place,
    signed,
)
from wedding_gallery.type_defs import LayoutKind, LayoutResult

_SALT = "polaroid"


def polaroid_pose(
    index: int,
    draws: tuple[float, float, float],
) -> tuple[float, float, float]:
    """
    Return (rotation, dx, dy) for the card at ``index``.

    The lookup tables give each position a base pose; ``draws`` adds
    a bounded jitter on top.
    """
    rot_u, dx_u, dy_u = draws
    base_x, base_y = POLAROID_POSITIONS[index % len(POLAROID_POSITIONS)]
    rotation = POLAROID_ROTATIONS[index % len(POLAROID_ROTATIONS)]
    return (
        rotation + signed(rot_u, POLAROID_ROTATION_JITTER),
        base_x + signed(dx_u, POLAROID_OFFSET_JITTER),
        base_y + signed(dy_u, POLAROID_OFFSET_JITTER),
    )


def layout_polaroid(request: LayoutRequest) -> LayoutResult:
    """
    Seat cards in breakpoint columns and scatter them.

    Poses are stable until the jitter cache is regenerated by a shuffle.
    """
    if not request.images:
        return empty_result(LayoutKind.POLAROID)
    columns = request.breakpoint.grid_columns
    card_w, card_h = POLAROID_CARD_SIZE
    cell_w = column_width(request.container.width, columns, request.gap)
    # keep the card aspect when the cell is narrower than a card
    scale = min(1.0, cell_w / card_w) if card_w else 1.0
    w, h = card_w * scale, card_h * scale
    pitch_y = h + request.gap + 2 * POLAROID_OFFSET_JITTER

    items = []
    for i, img in enumerate(request.images):
        row, col = divmod(i, columns)
        draws = request.jitter.uniform(img.id, _SALT, 3)
        rotation, dx, dy = polaroid_pose(i, draws)
        x = col * (cell_w + request.gap) + (cell_w - w) / 2 + dx * scale
        y = row * pitch_y + dy * scale
        items.append(
            place(img.id, Rect(x, y, x + w, y + h),
                  rotation=rotation, z_index=i),
        )
    return LayoutResult(
        kind=LayoutKind.POLAROID,
        items=tuple(items),
        sequence=request.ids,
        canvas=bounding_size(items),
    )
