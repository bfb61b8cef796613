"""Compose card images from a layout and card data."""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from cardsmith.card.deck import Deck, resolve_text
from cardsmith.config import Settings, get_settings
from cardsmith.formatting.renderer import FormattedTextRenderer, RenderResult
from cardsmith.project.model import ElementType, ProjectLayout, ProjectLayoutElement
from cardsmith.render.fonts import FontCache
from cardsmith.render.surface import Surface

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """A card element could not be rendered."""

    pass


class CardRenderer:
    """Render the cards of a layout to Pillow images.

    Elements are drawn in layout order onto a white card. Relative graphic
    and inline image paths resolve against the project directory.
    """

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        settings: Optional[Settings] = None,
        font_cache: Optional[FontCache] = None,
    ) -> None:
        self.project_dir = project_dir
        self.settings = settings or get_settings()
        self.font_cache = font_cache or FontCache(self.settings.font_dirs)
        self.text_renderer = FormattedTextRenderer(self.settings, base_dir=project_dir)

    def render_card(self, layout: ProjectLayout, row: Optional[dict[str, str]] = None) -> Image.Image:
        """Render one card.

        Raises:
            RenderError: If a graphic element's image cannot be loaded
        """
        surface = Surface.blank(layout.width, layout.height, font_cache=self.font_cache)
        row = row or {}
        for element in layout.elements:
            if not element.enabled:
                continue
            self.render_element(element, resolve_text(element.variable, row), surface)
        return surface.image

    def render_element(
        self, element: ProjectLayoutElement, text: str, surface: Surface
    ) -> Optional[RenderResult]:
        """Render a single element's resolved text."""
        if element.type is ElementType.GRAPHIC:
            self._render_graphic(element, text, surface)
            return None
        literal = element.type is ElementType.TEXT
        result = self.text_renderer.render(element, text, surface, literal=literal)
        if result.failed_renders:
            logger.warning(
                "%d markup element(s) failed to render in %s",
                result.failed_renders,
                element.name,
            )
        return result

    def _render_graphic(self, element: ProjectLayoutElement, text: str, surface: Surface) -> None:
        if not text.strip():
            return
        path = Path(text.strip())
        if self.project_dir is not None and not path.is_absolute():
            path = self.project_dir / path
        try:
            with Image.open(path) as source:
                image = source.convert("RGBA")
        except (OSError, UnidentifiedImageError) as e:
            raise RenderError(f"Cannot load graphic for {element.name}: {path}") from e
        surface.draw_image(image, element.bounds)

    def render_deck(self, layout: ProjectLayout) -> list[Image.Image]:
        """Render every card of a layout.

        Raises:
            OSError: If the layout's reference file cannot be read
            RenderError: If a card element cannot be rendered
        """
        deck = Deck(layout, self.project_dir)
        return [self.render_card(layout, row) for row in deck]
