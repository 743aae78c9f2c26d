"""Grid and lightbox thumbnail layouts."""

from __future__ import annotations

from wedding_gallery.layouts.core import (
    LayoutRequest,
    bounding_size,
    empty_result,
    place,
    square_cells,
)
from wedding_gallery.type_defs import LayoutKind, LayoutResult


def _square_grid(
    kind: LayoutKind,
    request: LayoutRequest,
    columns: int,
) -> LayoutResult:
    if not request.images:
        return empty_result(kind)
    cells = square_cells(
        len(request.images), columns, request.container.width, request.gap,
    )
    items = tuple(
        place(img.id, cell, z_index=i)
        for i, (img, cell) in enumerate(
            zip(request.images, cells, strict=True),
        )
    )
    return LayoutResult(
        kind=kind,
        items=items,
        sequence=request.ids,
        canvas=bounding_size(items),
    )


def layout_grid(request: LayoutRequest) -> LayoutResult:
    """Identity arrangement in breakpoint-dependent columns."""
    return _square_grid(
        LayoutKind.GRID, request, request.breakpoint.grid_columns,
    )


def layout_lightbox(request: LayoutRequest) -> LayoutResult:
    """Dense thumbnail grid that opens the full-screen viewer."""
    return _square_grid(
        LayoutKind.LIGHTBOX, request, request.breakpoint.thumbnail_columns,
    )
