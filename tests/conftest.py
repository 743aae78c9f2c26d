"""
Test configuration and shared fixtures for wedding_gallery.

Provides image and event collections, a fake clock for timers and
debouncers, a recording viewer host and TOML file helpers.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import tomlkit

import wedding_gallery.random_utils as wg_random
from wedding_gallery.layouts.core import JitterCache, LayoutRequest
from wedding_gallery.logging_utils import logger
from wedding_gallery.responsive import Breakpoint
from wedding_gallery.type_defs import GalleryEvent, GalleryImage, Size
from wedding_gallery.viewer.session import RecordingHost

CATEGORY_CYCLE = ("couple", "family", "engagement", "pre_wedding")


def make_image(
    image_id: str,
    category: str = "couple",
    order: int = 0,
    **extra: Any,
) -> GalleryImage:
    """Build a GalleryImage with a predictable url."""
    return GalleryImage(
        id=image_id,
        url=f"https://cdn.example/{image_id}.jpg",
        filename=f"{image_id}.jpg",
        category=category,
        order=order,
        **extra,
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def images() -> list[GalleryImage]:
    """Twelve images cycling through four categories."""
    return [
        make_image(f"img-{i}", CATEGORY_CYCLE[i % 4], order=i)
        for i in range(12)
    ]


@pytest.fixture
def image_factory() -> Callable[..., GalleryImage]:
    """Expose make_image to tests."""
    return make_image


@pytest.fixture
def make_images() -> Callable[..., list[GalleryImage]]:
    """Factory for ``n`` images in a single category."""

    def _make(n: int, category: str = "couple") -> list[GalleryImage]:
        return [make_image(f"p{i}", category, order=i) for i in range(n)]

    return _make


@pytest.fixture
def events() -> list[GalleryEvent]:
    """Events matching some of the image categories, plus an orphan."""
    return [
        GalleryEvent("ev-wed", "Couple Portraits", dt.date(2024, 3, 2),
                     venue="Palace Grounds", description="Sunset shoot"),
        GalleryEvent("ev-eng", "Engagement", dt.date(2024, 1, 20)),
        GalleryEvent("ev-mehndi", "Mehndi", dt.date(2024, 3, 1)),
    ]


@pytest.fixture
def make_request() -> Callable[..., LayoutRequest]:
    """Build a LayoutRequest with a fresh jitter cache by default."""

    def _make(
        images: list[GalleryImage],
        breakpoint: Breakpoint = Breakpoint.DESKTOP,
        **overrides: Any,
    ) -> LayoutRequest:
        overrides.setdefault("jitter", JitterCache())
        overrides.setdefault("container", Size(1200, 500))
        return LayoutRequest(
            images=tuple(images), breakpoint=breakpoint, **overrides,
        )

    return _make


@pytest.fixture
def clock() -> FakeClock:
    """A fake monotonic clock starting at t=100."""
    return FakeClock()


@pytest.fixture
def host() -> RecordingHost:
    """In-memory viewer host."""
    return RecordingHost()


@pytest.fixture
def write_toml(tmp_path: Path) -> Callable[[dict[str, Any], str], Path]:
    """Write ``data`` as TOML under tmp_path and return the path."""

    def _write(data: dict[str, Any], name: str = "data.toml") -> Path:
        doc = tomlkit.document()
        doc.update(data)
        path = tmp_path / name
        path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_rng_state() -> Generator[None, None, None]:
    """Keep the global seed from leaking between tests."""
    prev_seed = wg_random._STATE.seed  # type: ignore[attr-defined]
    yield
    wg_random._STATE.seed = prev_seed  # type: ignore[attr-defined]


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the gallery logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)


@pytest.fixture(autouse=True)
def restore_logger_level() -> Generator[None, None, None]:
    """Undo level changes made through set_log_level."""
    prev_level = logger.level
    yield
    logger.setLevel(prev_level)
