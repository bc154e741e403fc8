"""Glyph and character-set primitives for big-digit clock fonts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class Glyph:
    """A multi-line drawing of a single character."""
    id: str
    lines: tuple[str, ...]
    width: int = field(init=False)

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError(f"Glyph {self.id!r} needs at least one line")
        object.__setattr__(self, "width", max(len(line) for line in self.lines))

    @property
    def height(self) -> int:
        return len(self.lines)

    def draw_line(self, line: int) -> str:
        return self.lines[line].ljust(self.width)


class CharacterSet(Protocol):
    """Lookup table from characters to glyphs of a common height."""
    @property
    def name(self) -> str:
        ...

    @property
    def height(self) -> int:
        ...

    def get(self, char: str) -> Optional[Glyph]:
        ...


class NoopFont:
    """Font without glyphs; views render plain text with it."""

    name = "none"
    height = 0

    def get(self, char: str) -> Optional[Glyph]:
        del char
        return None


class GlyphFont:
    """Character set backed by a mapping of same-height glyphs."""

    def __init__(self, name: str, glyphs: Mapping[str, Glyph]):
        heights = {glyph.height for glyph in glyphs.values()}
        if len(heights) != 1:
            raise ValueError(f"Font {name!r} glyphs must share one height, got {sorted(heights)}")
        self._name = name
        self._glyphs = dict(glyphs)
        self._height = heights.pop()

    @property
    def name(self) -> str:
        return self._name

    @property
    def height(self) -> int:
        return self._height

    def get(self, char: str) -> Optional[Glyph]:
        return self._glyphs.get(char)


def glyph(char: str, *lines: str) -> Glyph:
    return Glyph(id=char, lines=tuple(lines))


NONE = NoopFont()
