"""Project data model: projects own layouts, layouts own elements and references."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from cardsmith.formatting.geometry import RectF
from cardsmith.render.fonts import FontSpec

FONT_SEPARATOR = ";"


class ElementType(str, Enum):
    """How an element's variable text is interpreted."""

    FORMATTED_TEXT = "formattedtext"
    TEXT = "text"
    GRAPHIC = "graphic"


def parse_font_string(value: str, default_family: str, default_size: float) -> FontSpec:
    """Parse ``family;size;bold;underline;italic;strikeout``.

    Every component is optional; flags are ``1``/``0`` (or true/false).

    Raises:
        ValueError: If the size is not a positive number
    """
    components = [part.strip() for part in value.split(FONT_SEPARATOR)] if value else []

    def component(index: int) -> Optional[str]:
        if index < len(components) and components[index]:
            return components[index]
        return None

    def flag(index: int) -> bool:
        text = component(index)
        return text is not None and text.lower() in ("1", "true", "yes")

    size_text = component(1)
    size = float(size_text) if size_text is not None else default_size
    if size <= 0:
        raise ValueError(f"Font size must be positive: {size_text!r}")
    return FontSpec(
        family=component(0) or default_family,
        size=size,
        bold=flag(2),
        underline=flag(3),
        italic=flag(4),
        strikeout=flag(5),
    )


@dataclass
class ProjectLayoutElement:
    """A positioned field on a card layout.

    Attributes:
        name: Element name (also the column name used for card data)
        type: How the variable text is rendered
        x: Left edge in layout pixels
        y: Top edge in layout pixels
        width: Width in pixels
        height: Height in pixels
        variable: Text definition; may reference card data as ``@[column]``
        font: Font string, see ``parse_font_string``
        color: Default text colour string
        align: Horizontal alignment (left, center, right)
        vertical_align: Vertical alignment (top, middle, bottom)
        line_spacing: Extra pixels below each line
        enabled: Disabled elements are not rendered
    """

    name: str
    type: ElementType = ElementType.FORMATTED_TEXT
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0
    variable: str = ""
    font: str = ""
    color: str = ""
    align: str = "left"
    vertical_align: str = "top"
    line_spacing: float = 0.0
    enabled: bool = True

    @property
    def bounds(self) -> RectF:
        return RectF(self.x, self.y, self.width, self.height)

    def get_font_spec(self, default_family: str, default_size: float) -> FontSpec:
        return parse_font_string(self.font, default_family, default_size)


@dataclass
class ProjectLayoutReference:
    """A card data source, stored relative to the project file's directory."""

    relative_path: str
    default: bool = False


@dataclass
class ProjectLayout:
    """One card design: size, elements and data references."""

    name: str
    width: int = 825
    height: int = 1125
    dpi: int = 300
    default_count: int = 1
    elements: list[ProjectLayoutElement] = field(default_factory=list)
    references: list[ProjectLayoutReference] = field(default_factory=list)

    def get_element(self, name: str) -> Optional[ProjectLayoutElement]:
        for element in self.elements:
            if element.name == name:
                return element
        return None

    def get_default_reference(self) -> Optional[ProjectLayoutReference]:
        """The reference marked default, else the first one."""
        for reference in self.references:
            if reference.default:
                return reference
        return self.references[0] if self.references else None


@dataclass
class Project:
    """A card project: an ordered list of layouts."""

    layouts: list[ProjectLayout] = field(default_factory=list)

    def get_layout(self, name: str) -> Optional[ProjectLayout]:
        for layout in self.layouts:
            if layout.name == name:
                return layout
        return None

    @classmethod
    def default(cls) -> "Project":
        """A new project with a single layout named 'Default'."""
        return cls(layouts=[ProjectLayout("Default")])
