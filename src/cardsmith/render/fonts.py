"""Font resolution for the rendering surface."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Sequence

from PIL import ImageFont

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = (".ttf", ".otf")

# File name suffixes tried for each (bold, italic) combination
STYLE_SUFFIXES: dict[tuple[bool, bool], tuple[str, ...]] = {
    (False, False): ("", "-Regular", "-Book"),
    (True, False): ("-Bold", "bd", "b"),
    (False, True): ("-Italic", "-Oblique", "i"),
    (True, True): ("-BoldItalic", "-BoldOblique", "bi", "z"),
}


@dataclass(frozen=True)
class FontSpec:
    """Font selection used by text runs.

    Sizes are in pixels of the target surface.

    Attributes:
        family: Font family / file stem (e.g. "DejaVuSans")
        size: Pixel size
        bold: Bold face
        italic: Italic face
        underline: Draw an underline below the run
        strikeout: Draw a line through the run
    """

    family: str
    size: float
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikeout: bool = False

    def with_changes(self, **changes) -> "FontSpec":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


class FontCache:
    """Resolve FontSpec values to Pillow fonts, caching the results.

    Lookup order for a family is the configured font directories, then
    Pillow's own search of the system font paths, then Pillow's bundled
    default font.
    """

    def __init__(self, font_dirs: Optional[Sequence[Path]] = None) -> None:
        self.font_dirs = [Path(d) for d in (font_dirs or [])]
        self._fonts: dict[tuple, ImageFont.FreeTypeFont] = {}
        self._files: dict[tuple[str, bool, bool], Optional[str]] = {}

    def get(self, spec: FontSpec) -> ImageFont.FreeTypeFont:
        """Get the Pillow font for a spec."""
        key = (spec.family.lower(), spec.size, spec.bold, spec.italic)
        font = self._fonts.get(key)
        if font is None:
            font = self._load(spec)
            self._fonts[key] = font
        return font

    def _load(self, spec: FontSpec) -> ImageFont.FreeTypeFont:
        path = self._find_file(spec.family, spec.bold, spec.italic)
        if path is not None:
            return ImageFont.truetype(path, spec.size)

        for suffix in STYLE_SUFFIXES[(spec.bold, spec.italic)]:
            for ext in FONT_EXTENSIONS:
                try:
                    return ImageFont.truetype(f"{spec.family}{suffix}{ext}", spec.size)
                except OSError:
                    continue

        logger.debug("Font %r not found, using default font", spec.family)
        return ImageFont.load_default(size=spec.size)

    def _find_file(self, family: str, bold: bool, italic: bool) -> Optional[str]:
        key = (family.lower(), bold, italic)
        if key in self._files:
            return self._files[key]

        wanted = {
            f"{family}{suffix}".lower() for suffix in STYLE_SUFFIXES[(bold, italic)]
        }
        found = None
        for font_dir in self.font_dirs:
            if not font_dir.is_dir():
                continue
            for candidate in sorted(font_dir.rglob("*")):
                if (
                    candidate.suffix.lower() in FONT_EXTENSIONS
                    and candidate.stem.lower() in wanted
                ):
                    found = str(candidate)
                    break
            if found:
                break

        self._files[key] = found
        return found
