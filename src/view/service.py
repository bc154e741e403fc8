"""Clock text formatting and big-digit rendering of remaining time."""

from __future__ import annotations

import math

from .ansi_shadow import ANSI_SHADOW
from .font import NONE, CharacterSet
from .templar import TEMPLAR

FONTS: dict[str, CharacterSet] = {
    NONE.name: NONE,
    ANSI_SHADOW.name: ANSI_SHADOW,
    TEMPLAR.name: TEMPLAR,
}

GLYPH_SEPARATOR = " "


def get_font(name: str) -> CharacterSet:
    """Look up a registered font by name (case-insensitive)."""
    key = name.strip().lower().replace("-", "_")
    font = FONTS.get(key)
    if font is None:
        allowed = ", ".join(sorted(FONTS))
        raise ValueError(f"Unknown font {name!r}; expected one of: {allowed}")
    return font


def format_clock(remaining_ms: int) -> str:
    """Format milliseconds as `MM:SS`, or `HH:MM:SS` from one hour on.

    Partial seconds round up so the clock only reads `00:00` at zero.
    """
    seconds = int(math.ceil(max(0, remaining_ms) / 1000))
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


class View:
    """Renders the remaining time of a countdown with a character set."""

    def __init__(self, font: CharacterSet = NONE):
        self._font = font

    @property
    def font(self) -> CharacterSet:
        return self._font

    @property
    def height(self) -> int:
        return max(1, self._font.height)

    def render(self, remaining_ms: int) -> str:
        text = format_clock(remaining_ms)
        if self._font.height == 0:
            return text

        rows: list[str] = []
        for line in range(self._font.height):
            cells = []
            for char in text:
                glyph = self._font.get(char)
                cells.append(glyph.draw_line(line) if glyph is not None else " ")
            rows.append(GLYPH_SEPARATOR.join(cells))
        return "\n".join(rows)
