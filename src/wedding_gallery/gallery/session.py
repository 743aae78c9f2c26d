"""
High level gallery session shared by the CLI and embedding hosts.

A :class:`GallerySession` owns the inputs of a layout pass (images,
category, tier-gated layout kind, breakpoint, collage template,
expanded timeline section and the jitter generation) and recomputes the
:class:`LayoutResult` only when one of them changes. It also owns the
carousel window and the modal viewer, keeping the viewer's selection
tied to image ids whenever the visible sequence changes. Per-image
"loaded" flags are tracked beside the layout and never feed into it.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from wedding_gallery.config import GalleryConfig
from wedding_gallery.constants import ALL_CATEGORIES
from wedding_gallery.filtering import (
    categories,
    category_counts,
    filter_images,
)
from wedding_gallery.layouts import generate_layout
from wedding_gallery.layouts.carousel import CarouselWindow
from wedding_gallery.layouts.collage import get_template
from wedding_gallery.layouts.core import JitterCache, LayoutRequest
from wedding_gallery.logging_utils import logger
from wedding_gallery.responsive import (
    Breakpoint,
    BreakpointThresholds,
    ResizeDebouncer,
)
from wedding_gallery.tiers import TierPolicy
from wedding_gallery.type_defs import LayoutKind, Notice, Size, Tier
from wedding_gallery.viewer.actions import download_image, share_image
from wedding_gallery.viewer.autoplay import AutoplayTimer
from wedding_gallery.viewer.controller import ViewerController

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from wedding_gallery.type_defs import (
        GalleryEvent,
        GalleryImage,
        LayoutResult,
    )
    from wedding_gallery.viewer.actions import PlatformIO
    from wedding_gallery.viewer.session import ViewerHost

_CAROUSELS = frozenset({LayoutKind.SINGLE_CAROUSEL, LayoutKind.MULTI_CAROUSEL})


class GallerySession:
    """
    Filter, lay out and view one gallery for one account tier.

    Args:
        images: Ordered image collection.
        tier: Account tier; gates :meth:`select_layout`.
        config: Validated configuration; defaults when omitted.
        events: Optional named events for the timeline.
        on_upgrade: Called with the required tier when a locked layout
            is selected.
        host: Presentation host for the modal viewer.
        clock: Monotonic clock shared by timers and the resize debouncer.

    """

    def __init__(  # noqa: PLR0913
        self,
        images: Iterable[GalleryImage] = (),
        tier: Tier | str = Tier.FREE,
        *,
        config: GalleryConfig | None = None,
        events: Iterable[GalleryEvent] = (),
        on_upgrade: Callable[[Tier], None] | None = None,
        host: ViewerHost | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or GalleryConfig.model_validate({})
        self._policy = TierPolicy()
        self._tier = Tier.parse(tier)
        self._images: tuple[GalleryImage, ...] = tuple(images)
        self._events: tuple[GalleryEvent, ...] = tuple(events)
        self._on_upgrade = on_upgrade
        self._host = host
        self._clock = clock
        self._category = ALL_CATEGORIES
        self._template = get_template(self._config.layout.collage_template).id
        self._jitter = JitterCache(seed=self._config.random.seed)
        self._height = self._config.layout.container_height
        self._resizer = ResizeDebouncer(
            self._config.layout.container_width,
            thresholds=BreakpointThresholds.from_config(
                self._config.responsive,
            ),
            delay=self._config.responsive.resize_debounce_seconds,
            clock=clock,
        )
        self._layout = self._initial_layout()
        self._carousel = self._new_carousel()
        self._viewer: ViewerController | None = None
        self._cache: LayoutResult | None = None
        self._expanded_section: str | None = None
        self._loaded: set[str] = set()
        logger.debug(
            "Gallery session: %d images, tier %s, layout %s",
            len(self._images), self._tier.label, self._layout.value,
        )

    def _initial_layout(self) -> LayoutKind:
        configured = LayoutKind.parse(self._config.layout.default_layout)
        if self._policy.is_available(self._tier, configured):
            return configured
        return self._policy.default_layout(self._tier)

    # ---- inputs ----------------------------------------------------------

    @property
    def config(self) -> GalleryConfig:
        """Active configuration."""
        return self._config

    @property
    def images(self) -> tuple[GalleryImage, ...]:
        """Full image collection."""
        return self._images

    @property
    def events(self) -> tuple[GalleryEvent, ...]:
        """Timeline events."""
        return self._events

    @property
    def tier(self) -> Tier:
        """Account tier."""
        return self._tier

    @property
    def policy(self) -> TierPolicy:
        """Layout entitlement rules."""
        return self._policy

    @property
    def category(self) -> str:
        """Active category tag or ``"all"``."""
        return self._category

    @property
    def layout_kind(self) -> LayoutKind:
        """Applied layout."""
        return self._layout

    @property
    def template(self) -> str:
        """Collage template id."""
        return self._template

    @property
    def breakpoint(self) -> Breakpoint:
        """Committed breakpoint."""
        return self._resizer.breakpoint

    @property
    def container(self) -> Size:
        """Committed container size."""
        return Size(self._resizer.width, self._height)

    @property
    def carousel(self) -> CarouselWindow:
        """Window over the filtered sequence for carousel layouts."""
        return self._carousel

    @property
    def expanded_section(self) -> str | None:
        """Timeline section shown in full, if any."""
        return self._expanded_section

    @property
    def viewer(self) -> ViewerController | None:
        """Viewer of the last :meth:`open_viewer` call, if any."""
        return self._viewer

    def filtered_images(self) -> tuple[GalleryImage, ...]:
        """Images of the active category, in collection order."""
        return filter_images(self._images, self._category)

    def categories(self) -> list[str]:
        """Category tags present in the collection."""
        return categories(self._images)

    def category_counts(self) -> dict[str, int]:
        """Images per category."""
        return category_counts(self._images)

    def available_layouts(self) -> list[LayoutKind]:
        """Layouts the current tier may select."""
        return self._policy.available(self._tier)

    def locked_layouts(self) -> list[LayoutKind]:
        """Layouts that need an upgrade."""
        return self._policy.locked(self._tier)

    # ---- state changes ---------------------------------------------------

    def select_category(self, category: str) -> tuple[GalleryImage, ...]:
        """Switch category and return the new filtered images."""
        if category != self._category:
            self._category = category
            self._sequence_changed()
        return self.filtered_images()

    def select_layout(self, kind: LayoutKind | str) -> bool:
        """
        Apply ``kind`` if the tier allows it.

        Locked layouts call ``on_upgrade`` and leave the current layout
        in place. Returns whether the layout was applied.
        """
        selected = self._policy.select(self._tier, kind, self._request_upgrade)
        if selected is None:
            return False
        if selected != self._layout:
            self._layout = selected
            self._close_viewer()
            self._carousel = self._new_carousel()
            self._invalidate()
        return True

    def select_template(self, template_id: str) -> str:
        """Switch collage template; unknown ids fall back to the heart."""
        template = get_template(template_id).id
        if template != self._template:
            self._template = template
            self._invalidate()
        return template

    def set_tier(self, tier: Tier | str) -> None:
        """Change the account tier, leaving a layout it no longer allows."""
        self._tier = Tier.parse(tier)
        if not self._policy.is_available(self._tier, self._layout):
            logger.info(
                "Layout %s not available for tier %s; falling back",
                self._layout.value, self._tier.label,
            )
            self._layout = self._policy.default_layout(self._tier)
            self._close_viewer()
            self._carousel = self._new_carousel()
            self._invalidate()

    def expand_section(self, section_id: str | None) -> None:
        """Show one timeline section in full; ``None`` collapses all."""
        if section_id != self._expanded_section:
            self._expanded_section = section_id
            self._invalidate()

    def toggle_section(self, section_id: str) -> str | None:
        """Expand ``section_id``, or collapse it if already expanded."""
        if self._expanded_section == section_id:
            self.expand_section(None)
        else:
            self.expand_section(section_id)
        return self._expanded_section

    def regenerate(self) -> int:
        """Re-roll artistic placements; return the new generation."""
        generation = self._jitter.regenerate()
        self._invalidate()
        return generation

    def shuffle(self) -> int:
        """Alias of :meth:`regenerate` used by the polaroid view."""
        return self.regenerate()

    def update_images(
        self,
        images: Iterable[GalleryImage],
        events: Iterable[GalleryEvent] | None = None,
    ) -> None:
        """Replace the collection; an open viewer follows its image by id."""
        self._images = tuple(images)
        if events is not None:
            self._events = tuple(events)
        self._loaded &= {img.id for img in self._images}
        self._sequence_changed()

    def resize(self, width: float, height: float | None = None) -> None:
        """Record a container resize; committed by :meth:`poll_resize`."""
        if height is not None and height != self._height:
            self._height = height
            self._invalidate()
        self._resizer.resize(width)

    def poll_resize(self, *, force: bool = False) -> Breakpoint | None:
        """Commit a settled resize; return the breakpoint if it changed."""
        before = self._resizer.width
        changed = self._resizer.flush() if force else self._resizer.poll()
        if changed is not None:
            self._carousel.resize(self._visible_count())
        if changed is not None or self._resizer.width != before:
            self._invalidate()
        return changed

    def tick(self) -> bool:
        """Drive timers from the host loop; return True if anything moved."""
        moved = self.poll_resize() is not None
        if self._layout in _CAROUSELS and self._carousel.tick():
            self._invalidate()
            moved = True
        if self._viewer is not None and self._viewer.tick():
            moved = True
        return moved

    # ---- layout ----------------------------------------------------------

    def request(self) -> LayoutRequest:
        """Inputs of the next layout pass."""
        return LayoutRequest(
            images=self.filtered_images(),
            breakpoint=self.breakpoint,
            container=self.container,
            gap=self._config.layout.gap,
            template=self._template,
            carousel_start=self._carousel.start,
            events=self._events,
            expanded_section=self._expanded_section,
            jitter=self._jitter,
        )

    def layout(self) -> LayoutResult:
        """Current layout, recomputed only after an input change."""
        if self._cache is None:
            self._cache = generate_layout(self._layout, self.request())
        return self._cache

    def carousel_next(self) -> int:
        """Page the carousel forward."""
        start = self._carousel.next()
        self._invalidate()
        return start

    def carousel_prev(self) -> int:
        """Page the carousel back."""
        start = self._carousel.prev()
        self._invalidate()
        return start

    def carousel_key(self, key: str) -> bool:
        """Route a key to the carousel; return True if consumed."""
        if self._layout not in _CAROUSELS:
            return False
        before = self._carousel.start
        consumed = self._carousel.handle_key(key)
        if self._carousel.start != before:
            self._invalidate()
        return consumed

    def toggle_carousel_autoplay(self) -> bool:
        """Play or pause carousel auto-slide; return the new state."""
        return self._carousel.toggle_autoplay()

    # ---- image loading ---------------------------------------------------

    def mark_loaded(self, image_id: str) -> bool:
        """
        Record that ``image_id`` finished decoding.

        Layout never waits on this; hosts use :meth:`is_loaded` to swap
        a placeholder for the real image. Unknown ids are ignored and
        False is returned.
        """
        if self._find(image_id) is None:
            return False
        self._loaded.add(image_id)
        return True

    def is_loaded(self, image_id: str) -> bool:
        """Whether ``image_id`` decoded and can replace its placeholder."""
        return image_id in self._loaded

    def pending_ids(self) -> tuple[str, ...]:
        """Filtered ids still showing a placeholder, in display order."""
        return tuple(
            img.id for img in self.filtered_images()
            if img.id not in self._loaded
        )

    # ---- viewer ----------------------------------------------------------

    def open_viewer(self, image_id: str) -> ViewerController:
        """Open the modal viewer on ``image_id``."""
        if self._viewer is None:
            viewer_cfg = self._config.viewer
            self._viewer = ViewerController(
                self.layout().sequence,
                host=self._host,
                autoplay_interval=viewer_cfg.autoplay_interval,
                supports_autoplay=self._layout is LayoutKind.TIMELINE,
                swipe_threshold=viewer_cfg.swipe_threshold,
                clock=self._clock,
            )
        else:
            self._viewer.update_sequence(self.layout().sequence)
        self._viewer.open(image_id)
        return self._viewer

    def close_viewer(self) -> None:
        """Close the viewer if open."""
        if self._viewer is not None:
            self._viewer.close()

    def share(self, image_id: str, platform: PlatformIO) -> Notice:
        """Share one image through ``platform``."""
        image = self._find(image_id)
        if image is None:
            return Notice("error", "Image not found")
        return share_image(platform, image)

    def download(self, image_id: str, platform: PlatformIO) -> Notice:
        """Download one image unless the gallery is protected."""
        image = self._find(image_id)
        if image is None:
            return Notice("error", "Image not found")
        return download_image(
            platform, image, protected=self._config.viewer.download_protection,
        )

    def close(self) -> None:
        """Release the viewer's modal session."""
        if self._viewer is not None:
            self._viewer.dispose()
            self._viewer = None

    def __enter__(self) -> GallerySession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ---- internals -------------------------------------------------------

    def _find(self, image_id: str) -> GalleryImage | None:
        return next((img for img in self._images if img.id == image_id), None)

    def _request_upgrade(self, target: Tier) -> None:
        if self._on_upgrade is not None:
            self._on_upgrade(target)

    def _visible_count(self) -> int:
        if self._layout is LayoutKind.MULTI_CAROUSEL:
            return self.breakpoint.visible_count
        return 1

    def _new_carousel(self) -> CarouselWindow:
        autoplay = None
        if self._layout in _CAROUSELS:
            autoplay = AutoplayTimer(
                self._config.viewer.carousel_interval, clock=self._clock,
            )
            if self._config.viewer.carousel_autoplay:
                autoplay.start()
        return CarouselWindow(
            len(self.filtered_images()),
            self._visible_count(),
            autoplay=autoplay,
        )

    def _invalidate(self) -> None:
        self._cache = None

    def _close_viewer(self) -> None:
        if self._viewer is not None:
            self._viewer.dispose()
            self._viewer = None

    def _sequence_changed(self) -> None:
        self._carousel.set_count(len(self.filtered_images()))
        self._invalidate()
        if self._viewer is not None and self._viewer.is_open:
            self._viewer.update_sequence(self.layout().sequence)
