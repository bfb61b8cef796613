"""Scoped markup that changes the running font or colour."""

from cardsmith.formatting.markup.base import (
    MarkupBase,
    format_color,
    format_float,
    get_argument,
    parse_color,
    parse_float,
    split_arguments,
    MarkupParseError,
)


class FontStyleMarkup(MarkupBase):
    """Turns one font flag on until the matching close tag."""

    scoped = True
    font_flag = ""

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        self._previous = False

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = getattr(process_data.font, self.font_flag)
        process_data.font = process_data.font.with_changes(**{self.font_flag: True})
        return True

    def close_markup(self, process_data) -> None:
        process_data.font = process_data.font.with_changes(
            **{self.font_flag: self._previous}
        )


class BoldMarkup(FontStyleMarkup):
    tag_name = "b"
    font_flag = "bold"


class ItalicMarkup(FontStyleMarkup):
    tag_name = "i"
    font_flag = "italic"


class UnderlineMarkup(FontStyleMarkup):
    tag_name = "u"
    font_flag = "underline"


class StrikeoutMarkup(FontStyleMarkup):
    tag_name = "s"
    font_flag = "strikeout"


class FontColorMarkup(MarkupBase):
    """``<color:value>`` sets the text colour."""

    tag_name = "color"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        self.color = parse_color(get_argument(split_arguments(arguments), 0))
        self._previous = None

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = process_data.color
        process_data.color = self.color
        return True

    def close_markup(self, process_data) -> None:
        process_data.color = self._previous

    def arguments(self) -> list[str]:
        return [format_color(self.color)]


class FontMarkup(MarkupBase):
    """``<font:family;size>`` switches font family and optionally size.

    An omitted size keeps the current size.
    """

    tag_name = "font"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        components = split_arguments(arguments)
        family = get_argument(components, 0)
        if family is None:
            raise MarkupParseError("Missing required argument: family")
        self.family = family
        size = get_argument(components, 1)
        self.size = None if size is None else parse_float(size, "size")
        if self.size is not None and self.size <= 0:
            raise MarkupParseError(f"Font size must be positive: {size!r}")
        self._previous = None

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = process_data.font
        changes = {"family": self.family}
        if self.size is not None:
            changes["size"] = self.size
        process_data.font = process_data.font.with_changes(**changes)
        return True

    def close_markup(self, process_data) -> None:
        changes = {"family": self._previous.family}
        if self.size is not None:
            changes["size"] = self._previous.size
        process_data.font = process_data.font.with_changes(**changes)

    def arguments(self) -> list[str]:
        args = [self.family]
        if self.size is not None:
            args.append(format_float(self.size))
        return args


class FontSizeMarkup(MarkupBase):
    """``<size:points>`` changes only the font size."""

    tag_name = "size"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        value = get_argument(split_arguments(arguments), 0)
        self.size = parse_float(value, "size")
        if self.size <= 0:
            raise MarkupParseError(f"Font size must be positive: {value!r}")
        self._previous = None

    def process_markup(self, element, data, process_data, surface) -> bool:
        self._previous = process_data.font.size
        process_data.font = process_data.font.with_changes(size=self.size)
        return True

    def close_markup(self, process_data) -> None:
        process_data.font = process_data.font.with_changes(size=self._previous)

    def arguments(self) -> list[str]:
        return [format_float(self.size)]
