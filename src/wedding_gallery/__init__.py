"""Public package exports for the wedding gallery layout engine."""

from __future__ import annotations

from .config import ConfigLoader, GalleryConfig
from .filtering import filter_images
from .gallery import GallerySession, load_manifest
from .layouts import LayoutRequest, generate_layout
from .responsive import Breakpoint
from .tiers import TierPolicy
from .type_defs import (
    GalleryEvent,
    GalleryImage,
    LaidOutItem,
    LayoutKind,
    LayoutResult,
    Notice,
    Size,
    Tier,
    TimelineSection,
)
from .viewer import ViewerController, ViewerState

__all__ = [
    "Breakpoint",
    "ConfigLoader",
    "GalleryConfig",
    "GalleryEvent",
    "GalleryImage",
    "GallerySession",
    "LaidOutItem",
    "LayoutKind",
    "LayoutRequest",
    "LayoutResult",
    "Notice",
    "Size",
    "Tier",
    "TierPolicy",
    "TimelineSection",
    "ViewerController",
    "ViewerState",
    "filter_images",
    "generate_layout",
    "load_manifest",
]
