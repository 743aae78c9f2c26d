"""
Gallery manifests: the image and event collection as a TOML file.

A manifest looks like::

    tier = "gold"

    [[images]]
    id = "img-1"
    url = "https://cdn.example/1.jpg"
    category = "couple"

    [[events]]
    id = "ev-1"
    name = "Engagement"
    date = 2024-02-14

Records are validated with pydantic and converted into the immutable
domain types the layout code consumes.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, model_validator

from wedding_gallery.type_defs import GalleryEvent, GalleryImage, Tier


class ImageRecord(BaseModel):
    """One ``[[images]]`` table."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    url: str
    filename: str = ""
    caption: str | None = None
    category: str = ""
    order: int | None = None

    def to_image(self, position: int) -> GalleryImage:
        """Domain image; ``position`` is the order when none is given."""
        return GalleryImage(
            id=self.id,
            url=self.url,
            filename=self.filename or self.url.rsplit("/", 1)[-1],
            caption=self.caption,
            category=self.category,
            order=self.order if self.order is not None else position,
        )


class EventRecord(BaseModel):
    """One ``[[events]]`` table."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str
    date: dt.date | None = None
    venue: str | None = None
    description: str | None = None

    def to_event(self) -> GalleryEvent:
        """Domain event."""
        return GalleryEvent(
            id=self.id,
            name=self.name,
            date=self.date,
            venue=self.venue,
            description=self.description,
        )


class GalleryManifest(BaseModel):
    """Whole manifest file."""

    model_config = ConfigDict(extra="forbid")

    tier: str = Tier.FREE.label
    images: list[ImageRecord] = Field(default_factory=list)
    events: list[EventRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check(self) -> GalleryManifest:
        Tier.parse(self.tier)
        seen: set[str] = set()
        for record in self.images:
            if record.id in seen:
                msg = f"Duplicate image id: {record.id}"
                raise ValueError(msg)
            seen.add(record.id)
        return self

    @property
    def account_tier(self) -> Tier:
        """Parsed account tier."""
        return Tier.parse(self.tier)

    def gallery_images(self) -> list[GalleryImage]:
        """Images in file order."""
        return [rec.to_image(i) for i, rec in enumerate(self.images)]

    def gallery_events(self) -> list[GalleryEvent]:
        """Events in file order."""
        return [rec.to_event() for rec in self.events]


def load_manifest(path: str | Path) -> GalleryManifest:
    """
    Read and validate a manifest file.

    Raises FileNotFoundError when ``path`` does not exist and
    pydantic.ValidationError when its contents are invalid.
    """
    manifest_path = Path(path)
    if not manifest_path.is_file():
        msg = f"Manifest file not found: {path}"
        raise FileNotFoundError(msg)
    with manifest_path.open("r", encoding="utf-8") as f:
        doc = tomlkit.load(f)
    return GalleryManifest.model_validate(doc.unwrap())
