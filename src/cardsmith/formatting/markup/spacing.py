"""Markup controlling alignment, spacing and positioning."""

from cardsmith.formatting.markup.base import (
    MarkupBase,
    MarkupParseError,
    format_float,
    get_argument,
    parse_float,
    split_arguments,
)
from cardsmith.formatting.state import Alignment


class AlignMarkup(MarkupBase):
    """``<align:left|center|right>``.

    A line takes the alignment in effect when its first run is placed.
    """

    tag_name = "align"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        value = get_argument(split_arguments(arguments), 0)
        try:
            self.alignment = Alignment.parse(value)
        except ValueError as e:
            raise MarkupParseError(f"Invalid alignment: {value!r}") from e
        self._previous = None

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = process_data.alignment
        process_data.alignment = self.alignment
        return True

    def close_markup(self, process_data) -> None:
        process_data.alignment = self._previous

    def arguments(self) -> list[str]:
        return [self.alignment.value]


class LineSpacingMarkup(MarkupBase):
    """``<ls:pixels>`` adds extra space below each line."""

    tag_name = "ls"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        self.spacing = parse_float(
            get_argument(split_arguments(arguments), 0), "line spacing", default=0.0
        )
        self._previous = 0.0

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = process_data.line_spacing
        process_data.line_spacing = self.spacing
        return True

    def close_markup(self, process_data) -> None:
        process_data.line_spacing = self._previous

    def arguments(self) -> list[str]:
        return [format_float(self.spacing)]


class OffsetMarkup(MarkupBase):
    """``<offset:x;y>`` shifts where enclosed text is drawn.

    Layout geometry is unchanged; only the glyphs move.
    """

    tag_name = "offset"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        components = split_arguments(arguments)
        self.x = parse_float(get_argument(components, 0), "x offset")
        self.y = parse_float(get_argument(components, 1), "y offset", default=0.0)
        self._previous = (0.0, 0.0)

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = process_data.offset
        px, py = self._previous
        process_data.offset = (px + self.x, py + self.y)
        return True

    def close_markup(self, process_data) -> None:
        process_data.offset = self._previous

    def arguments(self) -> list[str]:
        return [format_float(self.x), format_float(self.y)]


class SpaceWidthMarkup(MarkupBase):
    """``<spc:pixels>`` inserts a fixed-width space."""

    tag_name = "spc"

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        self.width = parse_float(get_argument(split_arguments(arguments), 0), "width")

    def process_markup(self, element, data, process_data, surface) -> bool:
        height = surface.line_height(process_data.font)
        process_data.add_run(self, self.width, height, is_space=True)
        return True

    def arguments(self) -> list[str]:
        return [format_float(self.width)]


class PushMarkup(MarkupBase):
    """``<push:width;height>`` reserves blank space on the current line.

    A height taller than the line grows the line.
    """

    tag_name = "push"

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        components = split_arguments(arguments)
        self.width = parse_float(get_argument(components, 0), "width")
        self.height = parse_float(get_argument(components, 1), "height", default=0.0)

    def process_markup(self, element, data, process_data, surface) -> bool:
        process_data.add_run(self, self.width, self.height, breakable=False)
        return True

    def arguments(self) -> list[str]:
        return [format_float(self.width), format_float(self.height)]
