"""
Full-screen viewer state machine.

The viewer is either closed or open on one position of the current
navigation sequence. Positions are always derived from image ids: when
the sequence changes underneath an open viewer, the selection is looked
up again by id and the viewer closes if the image is gone.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wedding_gallery.config_defaults import (
    DEFAULT_AUTOPLAY_INTERVAL,
    DEFAULT_SWIPE_THRESHOLD,
)
from wedding_gallery.constants import (
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ESCAPE,
    KEY_SPACE_ALIASES,
)
from wedding_gallery.logging_utils import logger
from wedding_gallery.viewer.autoplay import AutoplayTimer
from wedding_gallery.viewer.session import ModalSession, RecordingHost

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from wedding_gallery.viewer.session import ViewerHost


@dataclass(frozen=True, slots=True)
class ViewerState:
    """Snapshot of the viewer: closed when ``index`` is None."""

    index: int | None = None
    playing: bool = False

    @property
    def is_open(self) -> bool:
        """Whether an image is showing."""
        return self.index is not None


CLOSED = ViewerState()


class ViewerController:
    """
    Navigate a sequence of image ids in a modal viewer.

    ``next`` and ``prev`` always wrap. Manual navigation keeps autoplay
    running but restarts its countdown; closing stops it. The modal
    session (scroll lock and key listener) is held exactly while the
    viewer is open and is released by :meth:`close`, :meth:`dispose`
    or leaving a ``with`` block.
    """

    def __init__(  # noqa: PLR0913
        self,
        sequence: Iterable[str] = (),
        *,
        host: ViewerHost | None = None,
        autoplay_interval: float = DEFAULT_AUTOPLAY_INTERVAL,
        supports_autoplay: bool = False,
        swipe_threshold: float = DEFAULT_SWIPE_THRESHOLD,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sequence: tuple[str, ...] = tuple(sequence)
        self._host = host if host is not None else RecordingHost()
        self._supports_autoplay = supports_autoplay
        self._swipe_threshold = swipe_threshold
        self._timer = AutoplayTimer(autoplay_interval, clock=clock)
        self._state = CLOSED
        self._session: ModalSession | None = None
        self._touch_start: float | None = None
        self._touch_end: float | None = None

    # ---- queries ---------------------------------------------------------

    @property
    def state(self) -> ViewerState:
        """Current state snapshot."""
        return self._state

    @property
    def is_open(self) -> bool:
        """Whether an image is showing."""
        return self._state.is_open

    @property
    def sequence(self) -> tuple[str, ...]:
        """Image ids in navigation order."""
        return self._sequence

    @property
    def host(self) -> ViewerHost:
        """Presentation host receiving scroll and key changes."""
        return self._host

    @property
    def supports_autoplay(self) -> bool:
        """Whether Space toggles a slideshow (timeline viewer)."""
        return self._supports_autoplay

    @property
    def current_id(self) -> str | None:
        """Id of the showing image, or None when closed."""
        if self._state.index is None:
            return None
        return self._sequence[self._state.index]

    @property
    def position_label(self) -> str:
        """Human readable position such as ``"3 / 12"``."""
        if self._state.index is None:
            return ""
        return f"{self._state.index + 1} / {len(self._sequence)}"

    # ---- transitions -----------------------------------------------------

    def open(self, image_id: str) -> ViewerState:
        """Show ``image_id``; unknown ids leave the state unchanged."""
        try:
            index = self._sequence.index(image_id)
        except ValueError:
            logger.warning(
                "Cannot open viewer: image %s not in view", image_id,
            )
            return self._state
        if self._session is None:
            self._session = ModalSession(self._host, self.handle_key)
            self._session.open()
        self._state = ViewerState(index, self._state.playing)
        self._timer.restart()
        return self._state

    def close(self) -> ViewerState:
        """Close the viewer, stopping autoplay and releasing the session."""
        self._timer.stop()
        self._touch_start = self._touch_end = None
        session, self._session = self._session, None
        self._state = CLOSED
        if session is not None:
            session.close()
        return self._state

    def next(self) -> ViewerState:
        """Show the following image, wrapping to the first."""
        return self._step(1)

    def prev(self) -> ViewerState:
        """Show the preceding image, wrapping to the last."""
        return self._step(-1)

    def _step(self, delta: int, *, manual: bool = True) -> ViewerState:
        index = self._state.index
        if index is None or not self._sequence:
            return self._state
        index = (index + delta) % len(self._sequence)
        self._state = ViewerState(index, self._state.playing)
        if manual:
            self._timer.restart()
        return self._state

    def toggle_autoplay(self) -> bool:
        """Start or stop the slideshow; return whether it is playing."""
        if not self._supports_autoplay or not self.is_open:
            return False
        playing = self._timer.toggle()
        self._state = ViewerState(self._state.index, playing)
        logger.debug("Viewer autoplay %s", "on" if playing else "off")
        return playing

    def tick(self) -> bool:
        """Advance once if autoplay is due; return True if it advanced."""
        if not (self._state.playing and self.is_open):
            return False
        if not self._timer.poll():
            return False
        self._step(1, manual=False)
        return True

    def update_sequence(self, sequence: Iterable[str]) -> ViewerState:
        """Replace the navigation sequence and re-resolve the open image."""
        current = self.current_id
        self._sequence = tuple(sequence)
        if current is None:
            return self._state
        if current not in self._sequence:
            logger.info("Image %s left the view; closing viewer", current)
            return self.close()
        self._state = ViewerState(
            self._sequence.index(current), self._state.playing,
        )
        return self._state

    # ---- input -----------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Map a key press to a transition; return True if consumed."""
        if not self.is_open:
            return False
        if key == KEY_ESCAPE:
            self.close()
        elif key == KEY_ARROW_LEFT:
            self.prev()
        elif key == KEY_ARROW_RIGHT:
            self.next()
        elif key in KEY_SPACE_ALIASES and self._supports_autoplay:
            self.toggle_autoplay()
        else:
            return False
        return True

    def touch_start(self, x: float) -> None:
        """Record where a drag began."""
        self._touch_start = x
        self._touch_end = None

    def touch_move(self, x: float) -> None:
        """Record the latest drag position."""
        self._touch_end = x

    def touch_end(self) -> bool:
        """
        Finish a drag.

        A leftward drag longer than the swipe threshold shows the next
        image, a rightward one the previous; anything shorter, or a tap
        with no movement, does nothing.
        """
        start, end = self._touch_start, self._touch_end
        self._touch_start = self._touch_end = None
        if start is None or end is None or not self.is_open:
            return False
        distance = start - end
        if distance > self._swipe_threshold:
            self.next()
        elif distance < -self._swipe_threshold:
            self.prev()
        else:
            return False
        return True

    # ---- lifecycle -------------------------------------------------------

    def dispose(self) -> None:
        """Release everything; safe to call repeatedly."""
        self.close()

    def __enter__(self) -> ViewerController:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()
