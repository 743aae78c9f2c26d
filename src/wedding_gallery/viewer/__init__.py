"""Modal image viewer: state machine, autoplay, session guard, actions."""

from .actions import PlatformIO, download_image, share_image
from .autoplay import AutoplayTimer
from .controller import CLOSED, ViewerController, ViewerState
from .session import ModalSession, RecordingHost, ScrollLock, ViewerHost

__all__ = [
    "CLOSED",
    "AutoplayTimer",
    "ModalSession",
    "PlatformIO",
    "RecordingHost",
    "ScrollLock",
    "ViewerController",
    "ViewerHost",
    "ViewerState",
    "download_image",
    "share_image",
]
