"""In-place terminal rendering of the remaining time."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from view import View

CURSOR_UP_TEMPLATE = "\x1b[{lines}F"


class TerminalDisplay:
    """Redraws the clock on every tick without scrolling the terminal."""

    def __init__(self, view: Optional[View] = None, stream: Optional[TextIO] = None):
        self._view = view or View()
        self._stream = stream
        self._drawn = False
        self._width = 0

    @property
    def view(self) -> View:
        return self._view

    def show(self, remaining_ms: int) -> None:
        frame = self._view.render(remaining_ms)
        stream = self._output()
        if self._view.height == 1:
            # Pad so a shorter frame fully covers the previous one.
            stream.write(frame.ljust(self._width) + "\r")
            self._width = max(self._width, len(frame))
        else:
            if self._drawn:
                stream.write(CURSOR_UP_TEMPLATE.format(lines=self._view.height))
            stream.write(frame + "\n")
        self._drawn = True
        stream.flush()

    def announce(self, message: str) -> None:
        """Print `message` on its own line below the clock."""
        self.finish()
        stream = self._output()
        stream.write(message + "\n")
        stream.flush()

    def finish(self) -> None:
        """Leave the current frame in place and move past it."""
        if self._drawn and self._view.height == 1:
            stream = self._output()
            stream.write("\n")
            stream.flush()
        self._drawn = False
        self._width = 0

    def _output(self) -> TextIO:
        return self._stream or sys.stdout
