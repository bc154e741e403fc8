"""Phase transition notifications: terminal bell and optional chime."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Protocol, TextIO

import numpy as np

from .chime import Chime
from .errors import NotificationError

TERMINAL_BELL = "\a"


class AudioOutputLike(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int, blocking: bool = False) -> None:
        ...


class ChimeService:
    """Combines tone synthesis and playback into a single play operation."""
    def __init__(
        self,
        chime: Chime,
        output: AudioOutputLike,
        logger: Optional[logging.Logger] = None,
    ):
        self._chime = chime
        self._output = output
        self._logger = logger or logging.getLogger("notify.chime")
        self._wav: Optional[np.ndarray] = None

    def play(self) -> None:
        if self._wav is None:
            self._wav = self._chime.render()
        self._output.play(self._wav, self._chime.sample_rate_hz)


class Notifier:
    """Alerts the user when a pomodoro phase ends."""

    def __init__(
        self,
        *,
        bell: bool = True,
        stream: Optional[TextIO] = None,
        chime: Optional[ChimeService] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._bell = bell
        self._stream = stream
        self._chime = chime
        self._logger = logger or logging.getLogger("notify")

    def notify(self, message: str) -> None:
        self._logger.info("Notification: %s", message)
        if self._bell:
            stream = self._stream or sys.stdout
            stream.write(TERMINAL_BELL)
            stream.flush()
        if self._chime is not None:
            try:
                self._chime.play()
            except NotificationError as error:
                self._logger.error("Chime playback failed: %s", error)
