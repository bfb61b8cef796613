"""Literal text runs, line breaks and bullets."""

from typing import Optional

from cardsmith.formatting.colors import RGBA
from cardsmith.formatting.markup.base import (
    MarkupBase,
    format_float,
    get_argument,
    parse_float,
    split_arguments,
)
from cardsmith.render.fonts import FontSpec

DEFAULT_BULLET = "•"


class _StyledRun(MarkupBase):
    """A run of glyphs drawn with the style captured at layout time."""

    def __init__(self) -> None:
        super().__init__()
        self.font: Optional[FontSpec] = None
        self.color: RGBA = (0, 0, 0, 255)
        self.offset: tuple[float, float] = (0.0, 0.0)
        self.text_height = 0.0
        self.ascent = 0.0

    def _capture_style(self, process_data, surface) -> None:
        self.font = process_data.font
        self.color = process_data.color
        self.offset = process_data.offset
        self.text_height = surface.line_height(self.font)
        self.ascent = surface.ascent(self.font)

    def _draw_glyphs(self, text: str, width: float, surface) -> None:
        rect = self.target_rect
        dx, dy = self.offset
        # runs sit on the bottom of the line box
        top = rect.y + rect.height - self.text_height + dy
        left = rect.x + dx
        surface.draw_text(text, self.font, self.color, left, top)

        thickness = max(1.0, self.font.size / 14)
        if self.font.underline:
            y = top + self.ascent + thickness
            surface.draw_horizontal_line(self.color, left, left + width, y, thickness)
        if self.font.strikeout:
            y = top + self.ascent * 0.65
            surface.draw_horizontal_line(self.color, left, left + width, y, thickness)


class TextMarkup(_StyledRun):
    """A single word of literal text."""

    tag_name = "text"

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._capture_style(process_data, surface)
        width = surface.measure_text(self.text, self.font)
        process_data.add_run(self, width, self.text_height)
        return True

    def render(self, element, surface) -> bool:
        if self.font is None:
            return False
        if self.target_rect.is_empty:
            return True
        self._draw_glyphs(self.text, self.target_rect.width, surface)
        return True

    def to_markup(self) -> str:
        return self.text


class SpaceMarkup(_StyledRun):
    """A run of spaces between words.

    Spaces have width (so background colours span them) but draw nothing
    except underline and strikeout.
    """

    tag_name = "space"

    def __init__(self, text: str = " ") -> None:
        super().__init__()
        self.text = text

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._capture_style(process_data, surface)
        width = surface.measure_text(self.text, self.font)
        process_data.add_run(self, width, self.text_height, is_space=True)
        return True

    def render(self, element, surface) -> bool:
        if self.font is None:
            return False
        if self.target_rect.is_empty:
            return True
        if self.font.underline or self.font.strikeout:
            self._draw_glyphs("", self.target_rect.width, surface)
        return True

    def to_markup(self) -> str:
        return self.text


class NewlineMarkup(MarkupBase):
    """Forced line break (``<br>`` or a literal newline)."""

    tag_name = "br"

    def __init__(self, arguments: str = "") -> None:
        super().__init__()

    def process_markup(self, element, data, process_data, surface) -> bool:
        process_data.end_line()
        return True


class BulletMarkup(_StyledRun):
    """Starts a bulleted line.

    ``<bullet>`` or ``<bullet:glyph;indent>``. The bullet starts a new line
    when the current one has content, and wrapped lines that follow are
    indented to line up with the text after the bullet until the next
    explicit line break. The indent defaults to the width of the glyph
    followed by a space.
    """

    tag_name = "bullet"

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        components = split_arguments(arguments)
        self.glyph = get_argument(components, 0) or DEFAULT_BULLET
        indent = get_argument(components, 1)
        self.indent: Optional[float] = (
            None if indent is None else parse_float(indent, "indent")
        )

    def process_markup(self, element, data, process_data, surface) -> bool:
        if process_data.line_has_content:
            process_data.end_line()
        self._capture_style(process_data, surface)
        if self.indent is None:
            self.indent = surface.measure_text(self.glyph + " ", self.font)
        process_data.add_run(self, self.indent, self.text_height, breakable=False)
        process_data.indent = process_data.cursor_x
        return True

    def render(self, element, surface) -> bool:
        if self.font is None:
            return False
        self._draw_glyphs(self.glyph, 0.0, surface)
        return True

    def arguments(self) -> list[str]:
        args = [self.glyph]
        if self.indent is not None:
            args.append(format_float(self.indent))
        return args
