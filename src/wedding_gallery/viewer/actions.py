"""
Best-effort share and download intents.

Platform failures never escape these helpers: each returns a
:class:`~wedding_gallery.type_defs.Notice` for the presentation layer
to show and logs what went wrong.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from wedding_gallery.logging_utils import logger
from wedding_gallery.type_defs import Notice

if TYPE_CHECKING:  # pragma: no cover
    from wedding_gallery.type_defs import GalleryImage

__all__ = [
    "DOWNLOAD_PROTECTED_MESSAGE",
    "PlatformIO",
    "ShareCancelledError",
    "download_image",
    "share_image",
]

DOWNLOAD_PROTECTED_MESSAGE = "Download protection is enabled for this gallery."
SHARE_TITLE = "Wedding Photo"
SHARE_TEXT = "Check out this beautiful wedding photo!"


class ShareCancelledError(Exception):
    """Raised by a platform when the user dismisses the share sheet."""


class PlatformIO(Protocol):
    """Platform services used by the viewer toolbar."""

    def can_share(self) -> bool:
        """Whether a native share sheet is available."""
        ...

    def share(self, title: str, text: str, url: str) -> None:
        """Open the native share sheet."""
        ...

    def copy_to_clipboard(self, text: str) -> None:
        """Put ``text`` on the clipboard."""
        ...

    def download(self, url: str, filename: str) -> None:
        """Save ``url`` locally as ``filename``."""
        ...


def share_image(platform: PlatformIO, image: GalleryImage) -> Notice:
    """Share via the native sheet, falling back to copying the link."""
    try:
        if platform.can_share():
            platform.share(image.caption or SHARE_TITLE, SHARE_TEXT, image.url)
            return Notice("success", "Shared successfully")
        platform.copy_to_clipboard(image.url)
    except ShareCancelledError:
        logger.debug("Share of %s cancelled", image.id)
        return Notice("info", "Share cancelled")
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to share %s: %s", image.id, exc)
        return Notice("error", "Failed to share")
    return Notice("success", "Link copied to clipboard!")


def download_image(
    platform: PlatformIO,
    image: GalleryImage,
    *,
    protected: bool,
) -> Notice:
    """Download ``image`` unless the gallery is download protected."""
    if protected:
        logger.info("Blocked download of %s: protection enabled", image.id)
        return Notice("info", DOWNLOAD_PROTECTED_MESSAGE)
    filename = image.filename or f"{image.id}.jpg"
    try:
        platform.download(image.url, filename)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to download %s: %s", image.id, exc)
        return Notice("error", "Download failed")
    return Notice("success", f"Downloading {filename}")
