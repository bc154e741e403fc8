from .ansi_shadow import ANSI_SHADOW
from .font import NONE, CharacterSet, Glyph, GlyphFont, NoopFont
from .service import FONTS, View, format_clock, get_font
from .templar import TEMPLAR

__all__ = [
    "ANSI_SHADOW",
    "CharacterSet",
    "FONTS",
    "Glyph",
    "GlyphFont",
    "NONE",
    "NoopFont",
    "TEMPLAR",
    "View",
    "format_clock",
    "get_font",
]
