"""
Layout generators split into core primitives and one module per kind.

Every generator is a pure function ``LayoutRequest -> LayoutResult``;
:func:`generate_layout` dispatches on :class:`LayoutKind`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wedding_gallery.logging_utils import logger
from wedding_gallery.type_defs import LayoutKind, LayoutResult

from . import carousel, collage, core, grid, masonry, polaroid, timeline
from .carousel import (
    CarouselWindow,
    layout_multi_carousel,
    layout_single_carousel,
)
from .collage import COLLAGE_TEMPLATES, CollageTemplate, layout_collage
from .core import JitterCache, LayoutRequest, Rect
from .grid import layout_grid, layout_lightbox
from .masonry import layout_masonry
from .polaroid import layout_polaroid
from .timeline import build_sections, layout_timeline

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

GENERATORS: dict[LayoutKind, Callable[[LayoutRequest], LayoutResult]] = {
    LayoutKind.GRID: layout_grid,
    LayoutKind.SINGLE_CAROUSEL: layout_single_carousel,
    LayoutKind.MULTI_CAROUSEL: layout_multi_carousel,
    LayoutKind.MASONRY: layout_masonry,
    LayoutKind.LIGHTBOX: layout_lightbox,
    LayoutKind.TIMELINE: layout_timeline,
    LayoutKind.POLAROID: layout_polaroid,
    LayoutKind.COLLAGE: layout_collage,
}


def generate_layout(
    kind: LayoutKind | str,
    request: LayoutRequest,
) -> LayoutResult:
    """Run the generator for ``kind``."""
    layout = LayoutKind.parse(kind)
    result = GENERATORS[layout](request)
    logger.debug(
        "Laid out %d images as %s (%d placed, %d overflow)",
        len(request.images), layout.value,
        len(result.items), len(result.overflow),
    )
    return result


__all__ = [
    "COLLAGE_TEMPLATES",
    "GENERATORS",
    "CarouselWindow",
    "CollageTemplate",
    "JitterCache",
    "LayoutRequest",
    "Rect",
    "build_sections",
    "carousel",
    "collage",
    "core",
    "generate_layout",
    "grid",
    "layout_collage",
    "layout_grid",
    "layout_lightbox",
    "layout_masonry",
    "layout_multi_carousel",
    "layout_polaroid",
    "layout_single_carousel",
    "layout_timeline",
    "masonry",
    "polaroid",
    "timeline",
]
