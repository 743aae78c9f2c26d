"""
Defines shared types for the gallery layout engine.

Centralizes the enums, aliases and frozen records passed between the
filter, layout, viewer and gallery modules.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Literal

CollageTemplateId = Literal[
    "heart", "circle", "mosaic", "scattered", "geometric",
]
NoticeLevel = Literal["info", "success", "error"]


class Tier(IntEnum):
    """Subscription tiers in ascending order of entitlement."""

    FREE = 0
    SILVER = 1
    GOLD = 2
    PLATINUM = 3

    @property
    def label(self) -> str:
        """Lowercase wire name, e.g. ``"gold"``."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: str | Tier) -> Tier:
        """Parse a tier name, raising ValueError for unknown names."""
        if isinstance(value, Tier):
            return value
        try:
            return cls[value.strip().upper()]
        except KeyError as exc:
            msg = f"Unknown tier: {value!r}"
            raise ValueError(msg) from exc


class LayoutKind(StrEnum):
    """Gallery arrangement algorithms, in presentation order."""

    GRID = "grid"
    SINGLE_CAROUSEL = "single_carousel"
    MULTI_CAROUSEL = "multi_carousel"
    MASONRY = "masonry"
    LIGHTBOX = "lightbox"
    TIMELINE = "timeline"
    POLAROID = "polaroid"
    COLLAGE = "collage"

    @property
    def required_tier(self) -> Tier:
        """Lowest tier allowed to select this layout."""
        return _REQUIRED_TIERS[self]

    @classmethod
    def parse(cls, value: str | LayoutKind) -> LayoutKind:
        """Parse ``single-carousel`` or ``single_carousel`` style names."""
        if isinstance(value, LayoutKind):
            return value
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError as exc:
            msg = f"Unknown layout: {value!r}"
            raise ValueError(msg) from exc


_REQUIRED_TIERS: dict[LayoutKind, Tier] = {
    LayoutKind.GRID: Tier.FREE,
    LayoutKind.SINGLE_CAROUSEL: Tier.SILVER,
    LayoutKind.MULTI_CAROUSEL: Tier.SILVER,
    LayoutKind.MASONRY: Tier.GOLD,
    LayoutKind.LIGHTBOX: Tier.GOLD,
    LayoutKind.TIMELINE: Tier.PLATINUM,
    LayoutKind.POLAROID: Tier.PLATINUM,
    LayoutKind.COLLAGE: Tier.PLATINUM,
}


@dataclass(frozen=True, slots=True)
class GalleryImage:
    """One photograph as supplied by the storage collaborator."""

    id: str
    url: str
    filename: str = ""
    caption: str | None = None
    category: str = ""
    order: int = 0


@dataclass(frozen=True, slots=True)
class GalleryEvent:
    """Named event used by the timeline to date and describe sections."""

    id: str
    name: str
    date: dt.date | None = None
    venue: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Size:
    """Width and height in CSS pixels."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class LaidOutItem:
    """Computed placement for one image in one layout pass."""

    image_id: str
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    z_index: int = 0
    visible: bool = True
    border_radius: float = 0.0


@dataclass(frozen=True, slots=True)
class TimelineSection:
    """A chronological milestone, possibly without images."""

    id: str
    title: str
    description: str
    category: str | None = None
    date: dt.date | None = None
    event_id: str | None = None
    image_ids: tuple[str, ...] = ()
    hidden_ids: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True for event milestones that matched no image category."""
        return not self.image_ids

    @property
    def hidden_count(self) -> int:
        """Images behind a collapsed section's "+N more photos"."""
        return len(self.hidden_ids)


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """
    Output of one layout pass.

    ``sequence`` is the navigation order the viewer must use. ``overflow``
    lists ids a capped template or a collapsed timeline section did not
    place; together with ``items`` it covers every input image exactly
    once.
    """

    kind: LayoutKind
    items: tuple[LaidOutItem, ...] = ()
    sequence: tuple[str, ...] = ()
    canvas: Size = field(default_factory=lambda: Size(0, 0))
    overflow: tuple[str, ...] = ()
    sections: tuple[TimelineSection, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw."""
        return not self.items and not self.sections

    @property
    def overflow_count(self) -> int:
        """Number behind a "+N more" affordance."""
        return len(self.overflow)

    def item_for(self, image_id: str) -> LaidOutItem | None:
        """Look up the placement of ``image_id``, if it was placed."""
        for item in self.items:
            if item.image_id == image_id:
                return item
        return None


@dataclass(frozen=True, slots=True)
class Notice:
    """Non-blocking message surfaced to the user after a best-effort action."""

    level: NoticeLevel
    message: str
