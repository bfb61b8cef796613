"""Background colour behind a scoped region of text."""

import logging

from cardsmith.formatting.markup.base import (
    MarkupBase,
    format_color,
    format_float,
    get_argument,
    parse_color,
    parse_float,
    split_arguments,
)
from cardsmith.formatting.markup.close import CloseTagMarkup

logger = logging.getLogger(__name__)


class BackgroundColorMarkup(MarkupBase):
    """``<bgcolor:color;extra>`` fills the area behind the enclosed runs.

    The enclosed geometry is only known once layout has finished, so the
    rectangles are collected in the post-process pass: every non-empty
    rectangle after this tag up to its own close tag. Each rectangle is
    drawn ``extra`` pixels taller, but never below the bottom of the
    element.
    """

    tag_name = "bgcolor"
    scoped = True

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        components = split_arguments(arguments)
        self.color = parse_color(get_argument(components, 0))
        self.additional_pixels = parse_float(
            get_argument(components, 1), "extra height", default=0.0
        )
        self.rectangles = []

    def post_process_markup_rectangle(self, element, all_markups, index) -> bool:
        self.rectangles = []
        for markup in all_markups[index + 1 :]:
            if isinstance(markup, CloseTagMarkup) and markup.markup_to_close is self:
                break
            if not markup.target_rect.is_empty:
                self.rectangles.append(markup.target_rect.copy())
        return True

    def render(self, element, surface) -> bool:
        if not self.rectangles:
            return True

        # sharp edges for the fill
        with surface.saved_state():
            surface.smoothing = False
            for rect in self.rectangles:
                adjusted = rect.copy()
                # rectangles are element-local: the element bottom is its height
                adjusted.height = min(
                    rect.height + self.additional_pixels,
                    element.height - rect.top,
                )
                if adjusted.is_empty:
                    logger.debug("Skipping background outside element: %s", rect)
                    continue
                surface.fill_rectangle(self.color, adjusted)
        return True

    def arguments(self) -> list[str]:
        return [format_color(self.color), format_float(self.additional_pixels)]
