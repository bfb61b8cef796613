"""Base class and argument helpers for markup elements."""

from abc import ABC
from typing import TYPE_CHECKING, Optional

from cardsmith.formatting.colors import RGBA, color_to_string, translate_color_string
from cardsmith.formatting.geometry import RectF

if TYPE_CHECKING:
    from cardsmith.formatting.state import FormattedTextData, FormattedTextProcessData
    from cardsmith.project.model import ProjectLayoutElement
    from cardsmith.render.surface import Surface


ARGUMENT_SEPARATOR = ";"


class MarkupParseError(Exception):
    """Formatted text could not be parsed into markup elements."""

    def __init__(self, message: str, tag: Optional[str] = None) -> None:
        super().__init__(message)
        self.tag = tag

    def __str__(self) -> str:
        message = super().__str__()
        return f"{message} (in {self.tag})" if self.tag else message


def split_arguments(arguments: str) -> list[str]:
    """Split a tag argument string into stripped positional components."""
    if not arguments:
        return []
    return [part.strip() for part in arguments.split(ARGUMENT_SEPARATOR)]


def get_argument(components: list[str], index: int) -> Optional[str]:
    """Get a positional argument, or None when it is missing or blank."""
    if index < len(components) and components[index]:
        return components[index]
    return None


def parse_float(value: Optional[str], name: str, default: Optional[float] = None) -> float:
    """Parse a float argument, falling back to a default when omitted."""
    if value is None:
        if default is None:
            raise MarkupParseError(f"Missing required argument: {name}")
        return default
    try:
        return float(value)
    except ValueError as e:
        raise MarkupParseError(f"Invalid number for {name}: {value!r}") from e


def parse_color(value: Optional[str]) -> RGBA:
    """Parse a required colour argument."""
    if value is None:
        raise MarkupParseError("Missing required argument: color")
    try:
        return translate_color_string(value)
    except ValueError as e:
        raise MarkupParseError(f"Invalid color: {value!r}") from e


def format_float(value: float) -> str:
    """Format a float argument without a trailing '.0'."""
    return f"{value:g}"


def format_color(color: RGBA) -> str:
    return color_to_string(color)


class MarkupBase(ABC):
    """One parsed unit of formatted text.

    Markup elements are created by the tokenizer in text order and visited
    three times: ``process_markup`` during layout, then
    ``post_process_markup_rectangle`` once every element has geometry, then
    ``render``. Each hook returns False to report a failure.

    Attributes:
        tag_name: Canonical tag name (class attribute)
        scoped: Whether the tag applies until a matching close tag
        target_rect: Laid-out bounds, empty for elements without geometry
    """

    tag_name: str = ""
    scoped: bool = False

    def __init__(self) -> None:
        self.target_rect = RectF()

    def process_markup(
        self,
        element: "ProjectLayoutElement",
        data: "FormattedTextData",
        process_data: "FormattedTextProcessData",
        surface: "Surface",
    ) -> bool:
        """Layout pass hook. May change the shared process state; must not draw."""
        return True

    def close_markup(self, process_data: "FormattedTextProcessData") -> None:
        """Called by the matching close tag during layout."""

    def post_process_markup_rectangle(
        self,
        element: "ProjectLayoutElement",
        all_markups: list["MarkupBase"],
        index: int,
    ) -> bool:
        """Post-layout hook; may read the geometry of any other element."""
        return True

    def render(self, element: "ProjectLayoutElement", surface: "Surface") -> bool:
        """Draw this element onto the surface."""
        return True

    def arguments(self) -> list[str]:
        """Effective tag arguments with defaults filled in."""
        return []

    def to_markup(self) -> str:
        """Serialize back to tag syntax."""
        args = self.arguments()
        if args:
            return f"<{self.tag_name}:{ARGUMENT_SEPARATOR.join(args)}>"
        return f"<{self.tag_name}>"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_markup()!r}, rect={self.target_rect})"
