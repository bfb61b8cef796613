"""Drawing surface and font resolution."""

from cardsmith.render.fonts import FontCache, FontSpec
from cardsmith.render.surface import Surface

__all__ = [
    "FontCache",
    "FontSpec",
    "Surface",
]
