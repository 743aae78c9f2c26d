"""Category filtering over the ordered image collection."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from wedding_gallery.constants import ALL_CATEGORIES, CATEGORY_DISPLAY_NAMES

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from wedding_gallery.type_defs import GalleryImage

__all__ = [
    "categories",
    "category_counts",
    "display_name",
    "filter_images",
    "sort_by_order",
]


def filter_images(
    images: Sequence[GalleryImage],
    category: str = ALL_CATEGORIES,
) -> tuple[GalleryImage, ...]:
    """
    Return the active subset for ``category``.

    ``"all"`` is the identity. Any other value keeps matching images in
    their original order; an unknown category gives an empty tuple.
    """
    if category == ALL_CATEGORIES:
        return tuple(images)
    return tuple(img for img in images if img.category == category)


def categories(images: Sequence[GalleryImage]) -> list[str]:
    """Distinct non-empty categories in order of first appearance."""
    return list(dict.fromkeys(img.category for img in images if img.category))


def category_counts(images: Sequence[GalleryImage]) -> dict[str, int]:
    """Number of images per category, in first-appearance order."""
    counts = Counter(img.category for img in images if img.category)
    return {cat: counts[cat] for cat in categories(images)}


def display_name(category: str) -> str:
    """Human label for a category tag."""
    return CATEGORY_DISPLAY_NAMES.get(category, category)


def sort_by_order(images: Sequence[GalleryImage]) -> list[GalleryImage]:
    """Stable sort by the ``order`` key."""
    return sorted(images, key=lambda img: img.order)
