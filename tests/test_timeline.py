"""Tests for timeline sections and layout."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from wedding_gallery.layouts.timeline import (
    build_sections,
    layout_timeline,
    section_header_height,
)
from wedding_gallery.type_defs import GalleryEvent

if TYPE_CHECKING:
    from collections.abc import Callable

    from wedding_gallery.layouts.core import LayoutRequest
    from wedding_gallery.type_defs import GalleryImage


def test_sections_ordered_by_date_with_undated_last(
    images: list[GalleryImage],
    events: list[GalleryEvent],
) -> None:
    sections = build_sections(images, events)
    assert [s.id for s in sections] == [
        "category-engagement",
        "event-ev-mehndi",
        "category-couple",
        "category-family",
        "category-pre_wedding",
    ]
    assert [s.date for s in sections[:3]] == [
        dt.date(2024, 1, 20), dt.date(2024, 3, 1), dt.date(2024, 3, 2),
    ]
    assert sections[3].date is None


def test_event_matching_and_descriptions(
    images: list[GalleryImage],
    events: list[GalleryEvent],
) -> None:
    by_id = {s.id: s for s in build_sections(images, events)}

    couple = by_id["category-couple"]
    assert couple.event_id == "ev-wed"
    assert couple.description == "Sunset shoot"
    assert couple.title == "Couple"

    mehndi = by_id["event-ev-mehndi"]
    assert mehndi.is_empty
    assert mehndi.category is None
    assert mehndi.description == "Mehndi ceremony"

    pre = by_id["category-pre_wedding"]
    assert pre.title == "Pre-Wedding"
    assert pre.description == "Beautiful pre-wedding moments"
    assert pre.event_id is None


def test_event_name_contained_in_category_name(
    image_factory: Callable[..., GalleryImage],
) -> None:
    imgs = [image_factory("a", "pre_wedding")]
    events = [GalleryEvent("e1", "Wedding", dt.date(2024, 5, 1))]
    (section,) = build_sections(imgs, events)
    assert section.event_id == "e1"
    assert section.date == dt.date(2024, 5, 1)


def test_each_event_claimed_once(
    image_factory: Callable[..., GalleryImage],
) -> None:
    imgs = [image_factory("a", "couple"), image_factory("b", "couple_shoot")]
    events = [GalleryEvent("e1", "Couple", dt.date(2024, 2, 1))]
    sections = build_sections(imgs, events)
    assert [s.event_id for s in sections] == ["e1", None]


def test_images_sorted_by_order_inside_section(
    image_factory: Callable[..., GalleryImage],
) -> None:
    imgs = [
        image_factory("late", "family", order=9),
        image_factory("early", "family", order=1),
    ]
    (section,) = build_sections(imgs)
    assert section.image_ids == ("early", "late")


def test_events_only(events: list[GalleryEvent]) -> None:
    sections = build_sections([], events)
    assert all(s.is_empty for s in sections)
    assert len(sections) == 3


def test_layout_flattens_sections_for_navigation(
    images: list[GalleryImage],
    events: list[GalleryEvent],
    make_request: Callable[..., LayoutRequest],
) -> None:
    result = layout_timeline(make_request(images, events=tuple(events)))
    expected = tuple(
        image_id for s in result.sections for image_id in s.image_ids
    )
    assert result.sequence == expected
    assert result.sequence[:3] == ("img-2", "img-6", "img-10")
    assert sorted(result.sequence) == sorted(img.id for img in images)
    assert [item.image_id for item in result.items] == list(result.sequence)


def test_layout_sections_stack_vertically(
    images: list[GalleryImage],
    events: list[GalleryEvent],
    make_request: Callable[..., LayoutRequest],
) -> None:
    result = layout_timeline(make_request(images, events=tuple(events)))
    first = result.item_for("img-2")
    later = result.item_for("img-3")
    assert first is not None
    assert later is not None
    assert first.y == section_header_height()
    assert later.y > first.y
    assert result.canvas.height >= later.y + later.height


def test_layout_with_events_but_no_images(
    events: list[GalleryEvent],
    make_request: Callable[..., LayoutRequest],
) -> None:
    result = layout_timeline(make_request([], events=tuple(events)))
    assert result.items == ()
    assert len(result.sections) == 3
    assert not result.is_empty


def test_collapsed_sections_hide_images_past_the_preview(
    make_images: Callable[..., list[GalleryImage]],
    make_request: Callable[..., LayoutRequest],
) -> None:
    imgs = make_images(7)
    result = layout_timeline(make_request(imgs))
    (section,) = result.sections
    assert section.image_ids == tuple(f"p{i}" for i in range(7))
    assert section.hidden_ids == ("p4", "p5", "p6")
    assert [item.image_id for item in result.items] == [
        "p0", "p1", "p2", "p3",
    ]
    assert result.overflow == section.hidden_ids
    assert result.sequence == section.image_ids


def test_expanded_section_places_everything(
    make_images: Callable[..., list[GalleryImage]],
    make_request: Callable[..., LayoutRequest],
) -> None:
    imgs = make_images(7)
    collapsed = layout_timeline(make_request(imgs))
    expanded = layout_timeline(
        make_request(imgs, expanded_section="category-couple"),
    )
    (section,) = expanded.sections
    assert section.hidden_count == 0
    assert expanded.overflow == ()
    assert len(expanded.items) == 7
    assert expanded.canvas.height > collapsed.canvas.height
