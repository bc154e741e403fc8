"""Transition notifications. Audio playback lives in `notify.output`."""

from .chime import Chime
from .errors import NotificationError
from .service import ChimeService, Notifier

__all__ = [
    "Chime",
    "ChimeService",
    "NotificationError",
    "Notifier",
]
