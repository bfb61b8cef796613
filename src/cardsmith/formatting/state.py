"""Shared state for formatted text layout.

``FormattedTextData`` is the arena holding every markup element of one text
block with stable indices. ``FormattedTextProcessData`` is the accumulating
state the layout engine threads through each ``process_markup`` hook.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from cardsmith.formatting.colors import RGBA
from cardsmith.render.fonts import FontSpec

if TYPE_CHECKING:
    from cardsmith.formatting.markup.base import MarkupBase
    from cardsmith.render.surface import Surface


class Alignment(str, Enum):
    """Horizontal alignment of a line."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Alignment":
        """Parse an alignment name, defaulting to LEFT."""
        if not value:
            return cls.LEFT
        return cls(value.strip().lower())


class VerticalAlignment(str, Enum):
    """Vertical placement of the laid-out lines within the element."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, value: Optional[str]) -> "VerticalAlignment":
        if not value:
            return cls.TOP
        return cls(value.strip().lower())


@dataclass
class LayoutLine:
    """One finished line of laid-out runs.

    Attributes:
        indices: Indices of the markup elements placed on the line
        top: Line top in element coordinates
        height: Line height (tallest run)
        width: Width of the line content, excluding trailing spaces
        alignment: Horizontal alignment applied to the line
    """

    indices: list[int] = field(default_factory=list)
    top: float = 0.0
    height: float = 0.0
    width: float = 0.0
    alignment: Alignment = Alignment.LEFT

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class FormattedTextData:
    """All markup elements of a text block plus the resulting lines."""

    markups: list["MarkupBase"] = field(default_factory=list)
    lines: list[LayoutLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.markups)

    def index_of(self, markup: "MarkupBase") -> int:
        """Find a markup element by identity."""
        for index, candidate in enumerate(self.markups):
            if candidate is markup:
                return index
        raise ValueError(f"{markup!r} is not part of this text block")


@dataclass
class _PendingRun:
    index: int
    markup: "MarkupBase"
    is_space: bool


class FormattedTextProcessData:
    """Accumulating layout state for one text block.

    Hooks change the running font, colour, alignment and spacing, and place
    runs through ``add_run``; ``end_line`` finishes the current line.
    """

    def __init__(
        self,
        width: float,
        font: FontSpec,
        color: RGBA,
        surface: "Surface",
        alignment: Alignment = Alignment.LEFT,
        line_spacing: float = 0.0,
        base_dir: Optional[Path] = None,
    ) -> None:
        self.width = width
        self.font = font
        self.color = color
        self.surface = surface
        self.alignment = alignment
        self.line_spacing = line_spacing
        self.base_dir = base_dir
        self.offset: tuple[float, float] = (0.0, 0.0)

        # Hanging indent applied to wrapped lines (set by bullets)
        self.indent = 0.0
        self.current_index = 0

        self.lines: list[LayoutLine] = []
        self._x = 0.0
        self._y = 0.0
        self._line: list[_PendingRun] = []
        self._line_alignment: Optional[Alignment] = None
        self._wrapped = False

    @property
    def cursor_x(self) -> float:
        return self._x

    @property
    def cursor_y(self) -> float:
        return self._y

    @property
    def remaining_width(self) -> float:
        return self.width - self._x

    @property
    def line_has_content(self) -> bool:
        return any(not run.is_space for run in self._line)

    def add_run(
        self,
        markup: "MarkupBase",
        width: float,
        height: float,
        is_space: bool = False,
        breakable: bool = True,
    ) -> None:
        """Place a run on the current line, wrapping first if it does not fit.

        Spaces never trigger a wrap and take no width at the start of a
        wrapped line. A run wider than the element is placed on its own line.
        """
        if is_space:
            if self._wrapped and not self._line:
                width = 0.0
        elif (
            breakable
            and self.line_has_content
            and self._x + width > self.width
        ):
            self.end_line(wrapped=True)

        if self._line_alignment is None and not is_space:
            self._line_alignment = self.alignment

        markup.target_rect.x = self._x
        markup.target_rect.y = self._y
        markup.target_rect.width = width
        markup.target_rect.height = height
        self._line.append(_PendingRun(self.current_index, markup, is_space))
        self._x += width

    def end_line(self, wrapped: bool = False) -> LayoutLine:
        """Finish the current line and start a new one below it.

        Args:
            wrapped: True when the break comes from word wrapping; the next
                line then starts at the hanging indent.
        """
        runs = self._line
        if runs:
            height = max(run.markup.target_rect.height for run in runs)
        else:
            height = self.surface.line_height(self.font)

        # trailing spaces do not count towards alignment
        content = list(runs)
        while content and content[-1].is_space:
            content.pop()
        width = content[-1].markup.target_rect.right if content else 0.0

        alignment = self._line_alignment or self.alignment
        shift = 0.0
        if alignment is Alignment.CENTER:
            shift = max(0.0, (self.width - width) / 2)
        elif alignment is Alignment.RIGHT:
            shift = max(0.0, self.width - width)

        for run in runs:
            rect = run.markup.target_rect
            rect.x += shift
            rect.y = self._y
            rect.height = height

        line = LayoutLine(
            indices=[run.index for run in runs],
            top=self._y,
            height=height,
            width=width,
            alignment=alignment,
        )
        self.lines.append(line)

        self._y += height + self.line_spacing
        if not wrapped:
            self.indent = 0.0
        self._x = self.indent
        self._line = []
        self._line_alignment = None
        self._wrapped = wrapped
        return line

    def finish(self) -> list[LayoutLine]:
        """Finish the trailing line (if it holds anything) and return all lines."""
        if self._line:
            self.end_line()
        return self.lines
