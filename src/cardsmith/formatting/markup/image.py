"""Inline images."""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from cardsmith.formatting.markup.base import (
    MarkupBase,
    MarkupParseError,
    format_float,
    get_argument,
    parse_float,
    split_arguments,
)

logger = logging.getLogger(__name__)


class ImageMarkup(MarkupBase):
    """``<img:path;width;height>`` places an image inline with the text.

    Relative paths resolve against the project directory. With no size
    the image is scaled to the current line height; with one dimension the
    other follows the aspect ratio. An image that cannot be loaded fails
    the layout of the whole text block.
    """

    tag_name = "img"

    def __init__(self, arguments: str = "") -> None:
        super().__init__()
        components = split_arguments(arguments)
        path = get_argument(components, 0)
        if path is None:
            raise MarkupParseError("Missing required argument: path")
        self.path = path
        width = get_argument(components, 1)
        height = get_argument(components, 2)
        self.width: Optional[float] = None if width is None else parse_float(width, "width")
        self.height: Optional[float] = None if height is None else parse_float(height, "height")
        self.image: Optional[Image.Image] = None
        self.draw_size = (0.0, 0.0)

    def resolve_path(self, base_dir: Optional[Path]) -> Path:
        path = Path(self.path)
        if base_dir is not None and not path.is_absolute():
            return base_dir / path
        return path

    def process_markup(self, element, data, process_data, surface) -> bool:
        path = self.resolve_path(process_data.base_dir)
        try:
            with Image.open(path) as source:
                self.image = source.convert("RGBA")
        except (OSError, UnidentifiedImageError) as e:
            logger.warning("Failed to load inline image %s: %s", path, e)
            return False

        native_width, native_height = self.image.size
        width, height = self.width, self.height
        if width is None and height is None:
            height = surface.line_height(process_data.font)
        if width is None:
            width = native_width * height / native_height
        elif height is None:
            height = native_height * width / native_width

        self.draw_size = (width, height)
        process_data.add_run(self, width, height)
        return True

    def render(self, element, surface) -> bool:
        if self.image is None:
            return False
        width, height = self.draw_size
        rect = self.target_rect.copy()
        # bottom of the line box
        rect.y = rect.bottom - height
        rect.height = height
        rect.width = width
        surface.draw_image(self.image, rect)
        return True

    def arguments(self) -> list[str]:
        args = [self.path]
        if self.width is not None or self.height is not None:
            args.append("" if self.width is None else format_float(self.width))
        if self.height is not None:
            args.append(format_float(self.height))
        return args
