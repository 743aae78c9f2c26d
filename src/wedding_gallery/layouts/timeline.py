"""
Chronological timeline of category sections and events.

Images are grouped by category. Each group is matched to at most one
event by case-insensitive name containment (either direction, against
the raw tag or its display name). Events nobody matched become empty
milestones. Sections are ordered by date, with undated sections kept
after dated ones in first-appearance order. The viewer walks all
sections as one flat sequence.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from wedding_gallery.constants import TIMELINE_PREVIEW_COUNT
from wedding_gallery.filtering import display_name, sort_by_order
from wedding_gallery.layouts.core import (
    LayoutRequest,
    bounding_size,
    empty_result,
    place,
    square_cells,
)
from wedding_gallery.type_defs import (
    LayoutKind,
    LayoutResult,
    Size,
    TimelineSection,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from wedding_gallery.type_defs import GalleryEvent, GalleryImage

__all__ = ["build_sections", "layout_timeline", "section_header_height"]

_SECTION_HEADER_HEIGHT = 96.0
_UNCATEGORIZED = "Other"


def section_header_height() -> float:
    """Vertical space reserved above each section's images."""
    return _SECTION_HEADER_HEIGHT


def _names_match(event_name: str, category: str) -> bool:
    event = event_name.strip().lower()
    if not event:
        return False
    for candidate in {category.lower(), display_name(category).lower()}:
        if candidate and (candidate in event or event in candidate):
            return True
    return False


def _group_by_category(
    images: Sequence[GalleryImage],
) -> dict[str, list[GalleryImage]]:
    groups: dict[str, list[GalleryImage]] = {}
    for img in images:
        groups.setdefault(img.category, []).append(img)
    return groups


def build_sections(
    images: Sequence[GalleryImage],
    events: Sequence[GalleryEvent] = (),
) -> list[TimelineSection]:
    """Derive ordered timeline sections from images and events."""
    sections: list[TimelineSection] = []
    claimed: set[str] = set()

    for category, members in _group_by_category(images).items():
        event = next(
            (
                e for e in events
                if e.id not in claimed and _names_match(e.name, category)
            ),
            None,
        )
        if event is not None:
            claimed.add(event.id)
        title = display_name(category) if category else _UNCATEGORIZED
        description = (
            event.description if event is not None and event.description
            else f"Beautiful {title.lower()} moments"
        )
        sections.append(
            TimelineSection(
                id=f"category-{category}",
                title=title,
                description=description,
                category=category,
                date=event.date if event is not None else None,
                event_id=event.id if event is not None else None,
                image_ids=tuple(img.id for img in sort_by_order(members)),
            ),
        )

    for event in events:
        if event.id in claimed:
            continue
        sections.append(
            TimelineSection(
                id=f"event-{event.id}",
                title=event.name,
                description=event.description or f"{event.name} ceremony",
                date=event.date,
                event_id=event.id,
            ),
        )

    # stable: dated first by date, undated keep discovery order
    return sorted(
        sections,
        key=lambda s: (s.date is None, s.date.toordinal() if s.date else 0),
    )


def layout_timeline(request: LayoutRequest) -> LayoutResult:
    """
    Stack sections vertically with a thumbnail grid under each header.

    Sections other than ``request.expanded_section`` are collapsed to
    their first few images; the rest go to the section's ``hidden_ids``
    and to the result's ``overflow``. The viewer sequence still spans
    every image of every section.
    """
    sections = build_sections(request.images, request.events)
    if not sections:
        return empty_result(LayoutKind.TIMELINE)

    columns = request.breakpoint.grid_columns
    width = request.container.width
    items = []
    sequence: list[str] = []
    overflow: list[str] = []
    laid_out: list[TimelineSection] = []
    y = 0.0
    for section in sections:
        shown = section.image_ids
        if section.id != request.expanded_section:
            shown = section.image_ids[:TIMELINE_PREVIEW_COUNT]
        hidden = section.image_ids[len(shown):]
        y += _SECTION_HEADER_HEIGHT
        cells = square_cells(len(shown), columns, width, request.gap)
        for image_id, cell in zip(shown, cells, strict=True):
            items.append(
                place(image_id, cell.translate(0, y), z_index=len(items)),
            )
        if cells:
            y = max(cell.y1 for cell in cells) + y
        y += request.gap
        sequence.extend(section.image_ids)
        overflow.extend(hidden)
        laid_out.append(replace(section, hidden_ids=hidden))

    canvas = bounding_size(items)
    return LayoutResult(
        kind=LayoutKind.TIMELINE,
        items=tuple(items),
        sequence=tuple(sequence),
        canvas=Size(width, max(canvas.height, y - request.gap)),
        overflow=tuple(overflow),
        sections=tuple(laid_out),
    )
