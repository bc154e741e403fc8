"""Six-row "ANSI Shadow" digits."""

from __future__ import annotations

from .font import GlyphFont, glyph

ANSI_SHADOW = GlyphFont(
    "ansi_shadow",
    {
        "0": glyph(
            "0",
            " ██████╗ ",
            "██╔═████╗",
            "██║██╔██║",
            "████╔╝██║",
            "╚██████╔╝",
            " ╚═════╝ ",
        ),
        "1": glyph(
            "1",
            " ██╗",
            "███║",
            "╚██║",
            " ██║",
            " ██║",
            " ╚═╝",
        ),
        "2": glyph(
            "2",
            "██████╗ ",
            "╚════██╗",
            " █████╔╝",
            "██╔═══╝ ",
            "███████╗",
            "╚══════╝",
        ),
        "3": glyph(
            "3",
            "██████╗ ",
            "╚════██╗",
            " █████╔╝",
            " ╚═══██╗",
            "██████╔╝",
            "╚═════╝ ",
        ),
        "4": glyph(
            "4",
            "██╗  ██╗",
            "██║  ██║",
            "███████║",
            "╚════██║",
            "     ██║",
            "     ╚═╝",
        ),
        "5": glyph(
            "5",
            "███████╗",
            "██╔════╝",
            "███████╗",
            "╚════██║",
            "███████║",
            "╚══════╝",
        ),
        "6": glyph(
            "6",
            " ██████╗ ",
            "██╔════╝ ",
            "███████╗ ",
            "██╔═══██╗",
            "╚██████╔╝",
            " ╚═════╝ ",
        ),
        "7": glyph(
            "7",
            "███████╗",
            "╚════██║",
            "    ██╔╝",
            "   ██╔╝ ",
            "   ██║  ",
            "   ╚═╝  ",
        ),
        "8": glyph(
            "8",
            " █████╗ ",
            "██╔══██╗",
            "╚█████╔╝",
            "██╔══██╗",
            "╚█████╔╝",
            " ╚════╝ ",
        ),
        "9": glyph(
            "9",
            " █████╗ ",
            "██╔══██╗",
            "╚██████║",
            " ╚═══██║",
            " █████╔╝",
            " ╚════╝ ",
        ),
        ":": glyph(
            ":",
            "    ",
            " ██╗",
            " ╚═╝",
            " ██╗",
            " ╚═╝",
            "    ",
        ),
    },
)
