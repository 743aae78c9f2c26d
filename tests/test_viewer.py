"""Tests for the viewer state machine and its modal session."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from wedding_gallery.filtering import filter_images
from wedding_gallery.viewer.autoplay import AutoplayTimer
from wedding_gallery.viewer.controller import CLOSED, ViewerController
from wedding_gallery.viewer.session import ModalSession, RecordingHost

if TYPE_CHECKING:
    from collections.abc import Callable

    from conftest import FakeClock

    from wedding_gallery.type_defs import GalleryImage

IDS = ("a", "b", "c", "d")


@pytest.fixture
def viewer(host: RecordingHost, clock: FakeClock) -> ViewerController:
    return ViewerController(IDS, host=host, clock=clock)


class TestTransitions:
    def test_starts_closed(self, viewer: ViewerController) -> None:
        assert viewer.state == CLOSED
        assert viewer.current_id is None
        assert viewer.position_label == ""

    def test_open_resolves_index_by_id(self, viewer: ViewerController) -> None:
        state = viewer.open("c")
        assert state.index == 2
        assert viewer.current_id == "c"
        assert viewer.position_label == "3 / 4"

    def test_open_unknown_id_is_ignored(
        self,
        viewer: ViewerController,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level("WARNING"):
            assert viewer.open("zzz") == CLOSED
        assert "not in view" in caplog.text
        assert not viewer.host.scroll_locked

    def test_next_and_prev_wrap(self, viewer: ViewerController) -> None:
        viewer.open("d")
        assert viewer.next().index == 0
        assert viewer.prev().index == 3

    @pytest.mark.parametrize("start", IDS)
    def test_next_count_times_is_identity(
        self, viewer: ViewerController, start: str,
    ) -> None:
        viewer.open(start)
        for _ in IDS:
            viewer.next()
        assert viewer.current_id == start

    def test_navigation_while_closed_is_noop(
        self, viewer: ViewerController,
    ) -> None:
        assert viewer.next() == CLOSED
        assert viewer.prev() == CLOSED

    def test_scenario_filtered_open_next(
        self,
        image_factory: Callable[..., GalleryImage],
        host: RecordingHost,
    ) -> None:
        collection = [
            image_factory("1", "couple"),
            image_factory("2", "family"),
            image_factory("3", "couple"),
        ]
        filtered = filter_images(collection, "couple")
        viewer = ViewerController([img.id for img in filtered], host=host)
        assert viewer.open("3").index == 1
        assert viewer.next().index == 0
        assert viewer.current_id == "1"


class TestInput:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [("ArrowRight", "c"), ("ArrowLeft", "a"), ("x", "b")],
    )
    def test_arrow_keys(
        self, viewer: ViewerController, key: str, expected: str,
    ) -> None:
        viewer.open("b")
        viewer.handle_key(key)
        assert viewer.current_id == expected

    def test_escape_closes(self, viewer: ViewerController) -> None:
        viewer.open("b")
        assert viewer.handle_key("Escape")
        assert not viewer.is_open

    def test_host_key_listener_drives_viewer(
        self, viewer: ViewerController, host: RecordingHost,
    ) -> None:
        viewer.open("a")
        host.press("ArrowRight")
        assert viewer.current_id == "b"
        host.press("Escape")
        assert not viewer.is_open
        assert host.listeners == []

    def test_space_ignored_without_autoplay(
        self, viewer: ViewerController,
    ) -> None:
        viewer.open("a")
        assert not viewer.handle_key(" ")
        assert not viewer.state.playing

    @pytest.mark.parametrize(
        ("start_x", "end_x", "expected"),
        [(300, 200, "c"), (200, 300, "a"), (300, 260, "b"),
         (300, None, "b")],
        ids=["swipe-left", "swipe-right", "short", "tap"],
    )
    def test_touch(
        self,
        viewer: ViewerController,
        start_x: float,
        end_x: float | None,
        expected: str,
    ) -> None:
        viewer.open("b")
        viewer.touch_start(start_x)
        if end_x is not None:
            viewer.touch_move(end_x)
        viewer.touch_end()
        assert viewer.current_id == expected


class TestAutoplay:
    @pytest.fixture
    def timeline_viewer(
        self, host: RecordingHost, clock: FakeClock,
    ) -> ViewerController:
        return ViewerController(
            IDS, host=host, clock=clock,
            supports_autoplay=True, autoplay_interval=4.0,
        )

    def test_space_toggles_and_ticks(
        self, timeline_viewer: ViewerController, clock: FakeClock,
    ) -> None:
        timeline_viewer.open("a")
        assert timeline_viewer.handle_key("Space")
        assert timeline_viewer.state.playing
        clock.advance(3.5)
        assert not timeline_viewer.tick()
        clock.advance(0.5)
        assert timeline_viewer.tick()
        assert timeline_viewer.current_id == "b"

    def test_manual_navigation_restarts_countdown(
        self, timeline_viewer: ViewerController, clock: FakeClock,
    ) -> None:
        timeline_viewer.open("a")
        timeline_viewer.toggle_autoplay()
        clock.advance(3.0)
        timeline_viewer.next()
        clock.advance(3.0)
        assert not timeline_viewer.tick()
        assert timeline_viewer.state.playing
        clock.advance(1.0)
        assert timeline_viewer.tick()
        assert timeline_viewer.current_id == "c"

    def test_close_stops_autoplay(
        self, timeline_viewer: ViewerController, clock: FakeClock,
    ) -> None:
        timeline_viewer.open("a")
        timeline_viewer.toggle_autoplay()
        timeline_viewer.close()
        clock.advance(100)
        assert not timeline_viewer.tick()
        assert not timeline_viewer.state.playing
        timeline_viewer.open("a")
        assert not timeline_viewer.state.playing

    def test_toggle_requires_open_viewer(
        self, timeline_viewer: ViewerController,
    ) -> None:
        assert timeline_viewer.toggle_autoplay() is False

    def test_timer_rejects_non_positive_interval(self) -> None:
        with pytest.raises(ValueError, match="interval must be positive"):
            AutoplayTimer(0)

    def test_timer_reports_one_advance_per_poll(
        self, clock: FakeClock,
    ) -> None:
        timer = AutoplayTimer(1.0, clock=clock)
        timer.start()
        clock.advance(10)
        assert timer.poll()
        assert not timer.poll()


class TestUpdateSequence:
    def test_reresolves_by_id(self, viewer: ViewerController) -> None:
        viewer.open("c")
        state = viewer.update_sequence(["x", "c", "a"])
        assert state.index == 1
        assert viewer.current_id == "c"

    def test_closes_when_image_removed(
        self, viewer: ViewerController, host: RecordingHost,
    ) -> None:
        viewer.open("c")
        assert viewer.update_sequence(["a", "b"]) == CLOSED
        assert not host.scroll_locked

    def test_closed_viewer_just_takes_sequence(
        self, viewer: ViewerController,
    ) -> None:
        viewer.update_sequence(["z"])
        assert viewer.sequence == ("z",)
        assert viewer.open("z").index == 0


class TestModalSession:
    def test_open_locks_and_close_restores(
        self, viewer: ViewerController, host: RecordingHost,
    ) -> None:
        viewer.open("a")
        assert host.scroll_locked
        assert len(host.listeners) == 1
        viewer.open("b")
        assert len(host.listeners) == 1
        viewer.close()
        assert not host.scroll_locked
        assert host.listeners == []

    def test_context_manager_restores_on_error(
        self, host: RecordingHost,
    ) -> None:
        with pytest.raises(RuntimeError), ViewerController(
            IDS, host=host,
        ) as viewer:
            viewer.open("a")
            assert host.scroll_locked
            msg = "render failed"
            raise RuntimeError(msg)
        assert not host.scroll_locked
        assert host.listeners == []

    def test_dispose_is_idempotent(
        self, viewer: ViewerController, host: RecordingHost,
    ) -> None:
        viewer.open("a")
        viewer.dispose()
        viewer.dispose()
        unlocks = [c for c in host.calls if c == ("set_scroll_locked", False)]
        assert len(unlocks) == 1

    def test_nested_sessions_share_reference_count(
        self, host: RecordingHost,
    ) -> None:
        outer = ModalSession(host, lambda _key: None)
        inner = ModalSession(host, lambda _key: None)
        outer.open()
        inner.open()
        inner.close()
        assert host.scroll_locked
        outer.close()
        assert not host.scroll_locked

    def test_failed_listener_attach_releases_lock(self) -> None:
        class BrokenHost(RecordingHost):
            def add_key_listener(self, listener: object) -> None:
                msg = "no window"
                raise OSError(msg)

        host = BrokenHost()
        session = ModalSession(host, lambda _key: None)
        with pytest.raises(OSError, match="no window"):
            session.open()
        assert not host.scroll_locked
        assert not session.active
