"""Layout engine: assigns geometry to every markup element of a text block."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from cardsmith.config import Settings, get_settings
from cardsmith.formatting.colors import translate_color_string
from cardsmith.formatting.markup.base import MarkupBase
from cardsmith.formatting.state import (
    Alignment,
    FormattedTextData,
    FormattedTextProcessData,
    LayoutLine,
    VerticalAlignment,
)
from cardsmith.render.fonts import FontSpec

if TYPE_CHECKING:
    from cardsmith.project.model import ProjectLayoutElement
    from cardsmith.render.surface import Surface

logger = logging.getLogger(__name__)


class LayoutAbort(Exception):
    """A markup element failed during layout; the text block is abandoned."""

    def __init__(self, markup: MarkupBase, index: int) -> None:
        super().__init__(
            f"Layout aborted by {markup.to_markup()!r} at position {index}"
        )
        self.markup = markup
        self.index = index


class LayoutEngine:
    """Walk the markup elements in order, wrapping text into lines.

    Each element's ``process_markup`` hook runs with the shared
    ``FormattedTextProcessData``; text runs measure themselves against the
    running font and are placed (and wrapped) by the process data. When
    every element has been processed the trailing line is finished and
    the element's vertical alignment is applied.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        base_dir: Optional[Path] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.base_dir = base_dir

    def create_process_data(
        self, element: "ProjectLayoutElement", surface: "Surface"
    ) -> FormattedTextProcessData:
        """Initial layout state from the element's style defaults.

        Element style values that cannot be parsed are replaced by the
        configured defaults with a warning.
        """
        settings = self.settings
        try:
            font = element.get_font_spec(
                settings.default_font_family, settings.default_font_size
            )
        except ValueError as e:
            logger.warning("Invalid font %r on %s: %s", element.font, element.name, e)
            font = FontSpec(settings.default_font_family, settings.default_font_size)

        color_text = element.color or settings.default_font_color
        try:
            color = translate_color_string(color_text)
        except ValueError as e:
            logger.warning("Invalid color %r on %s: %s", element.color, element.name, e)
            color = translate_color_string(settings.default_font_color)

        try:
            alignment = Alignment.parse(element.align)
        except ValueError:
            logger.warning("Invalid alignment %r on %s", element.align, element.name)
            alignment = Alignment.LEFT

        return FormattedTextProcessData(
            width=element.width,
            font=font,
            color=color,
            surface=surface,
            alignment=alignment,
            line_spacing=element.line_spacing,
            base_dir=self.base_dir,
        )

    def layout(
        self,
        element: "ProjectLayoutElement",
        data: FormattedTextData,
        surface: "Surface",
    ) -> list[LayoutLine]:
        """Lay out every markup element, writing its target rectangle.

        Raises:
            LayoutAbort: If any process hook returns False
        """
        process_data = self.create_process_data(element, surface)

        for index, markup in enumerate(data.markups):
            process_data.current_index = index
            if not markup.process_markup(element, data, process_data, surface):
                raise LayoutAbort(markup, index)

        lines = process_data.finish()
        self._apply_vertical_alignment(element, data, lines)
        data.lines = lines
        logger.debug(
            "Laid out %d markup elements into %d lines for %s",
            len(data.markups),
            len(lines),
            element.name,
        )
        return lines

    def _apply_vertical_alignment(
        self,
        element: "ProjectLayoutElement",
        data: FormattedTextData,
        lines: list[LayoutLine],
    ) -> None:
        if not lines:
            return
        try:
            alignment = VerticalAlignment.parse(element.vertical_align)
        except ValueError:
            logger.warning(
                "Invalid vertical alignment %r on %s", element.vertical_align, element.name
            )
            return
        content_height = lines[-1].bottom
        if alignment is VerticalAlignment.MIDDLE:
            shift = (element.height - content_height) / 2
        elif alignment is VerticalAlignment.BOTTOM:
            shift = element.height - content_height
        else:
            return

        for line in lines:
            line.top += shift
            for index in line.indices:
                data.markups[index].target_rect.y += shift
