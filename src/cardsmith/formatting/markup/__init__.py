"""Markup element set for formatted text."""

from cardsmith.formatting.markup.base import MarkupBase, MarkupParseError
from cardsmith.formatting.markup.close import CloseTagMarkup
from cardsmith.formatting.markup.text import (
    BulletMarkup,
    NewlineMarkup,
    SpaceMarkup,
    TextMarkup,
)
from cardsmith.formatting.markup.style import (
    BoldMarkup,
    FontColorMarkup,
    FontMarkup,
    FontSizeMarkup,
    FontStyleMarkup,
    ItalicMarkup,
    StrikeoutMarkup,
    UnderlineMarkup,
)
from cardsmith.formatting.markup.background import BackgroundColorMarkup
from cardsmith.formatting.markup.spacing import (
    AlignMarkup,
    LineSpacingMarkup,
    OffsetMarkup,
    PushMarkup,
    SpaceWidthMarkup,
)
from cardsmith.formatting.markup.image import ImageMarkup

__all__ = [
    "MarkupBase",
    "MarkupParseError",
    "CloseTagMarkup",
    "TextMarkup",
    "SpaceMarkup",
    "NewlineMarkup",
    "BulletMarkup",
    "FontStyleMarkup",
    "BoldMarkup",
    "ItalicMarkup",
    "UnderlineMarkup",
    "StrikeoutMarkup",
    "FontColorMarkup",
    "FontMarkup",
    "FontSizeMarkup",
    "BackgroundColorMarkup",
    "AlignMarkup",
    "LineSpacingMarkup",
    "OffsetMarkup",
    "PushMarkup",
    "SpaceWidthMarkup",
    "ImageMarkup",
    "TAG_REGISTRY",
    "CLOSE_TAG",
]

# Generic close tag: ends the innermost open scope of any kind
CLOSE_TAG = "close"

# Map tag names (and aliases) to markup classes
TAG_REGISTRY: dict[str, type[MarkupBase]] = {
    "b": BoldMarkup,
    "i": ItalicMarkup,
    "u": UnderlineMarkup,
    "s": StrikeoutMarkup,
    "color": FontColorMarkup,
    "fc": FontColorMarkup,
    "bgcolor": BackgroundColorMarkup,
    "bgc": BackgroundColorMarkup,
    "font": FontMarkup,
    "size": FontSizeMarkup,
    "align": AlignMarkup,
    "ls": LineSpacingMarkup,
    "offset": OffsetMarkup,
    "br": NewlineMarkup,
    "spc": SpaceWidthMarkup,
    "push": PushMarkup,
    "img": ImageMarkup,
    "bullet": BulletMarkup,
}
