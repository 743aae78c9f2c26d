"""Gallery orchestration: session facade and manifest loading."""

from .manifest import (
    EventRecord,
    GalleryManifest,
    ImageRecord,
    load_manifest,
)
from .session import GallerySession

__all__ = [
    "EventRecord",
    "GalleryManifest",
    "GallerySession",
    "ImageRecord",
    "load_manifest",
]
