"""Two-pass rendering of laid-out formatted text."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from cardsmith.config import Settings, get_settings
from cardsmith.formatting.geometry import RectF
from cardsmith.formatting.layout import LayoutAbort, LayoutEngine
from cardsmith.formatting.markup.base import MarkupBase, MarkupParseError
from cardsmith.formatting.state import FormattedTextData, LayoutLine
from cardsmith.formatting.tokenizer import Tokenizer

if TYPE_CHECKING:
    from cardsmith.project.model import ProjectLayoutElement
    from cardsmith.render.surface import Surface

logger = logging.getLogger(__name__)


class RenderPassCoordinator:
    """Run the post-process and render passes over a laid-out text block.

    Both passes visit every markup element exactly once, in text order:
    post-process hooks may rely on geometry recorded by earlier hooks, and
    drawing order decides what overlaps what. Each render hook runs inside
    ``surface.saved_state()`` so whatever transient state it changes is
    restored before the next one runs.
    """

    def post_process(self, element: "ProjectLayoutElement", data: FormattedTextData) -> int:
        """Run every post-process hook. Returns the number of failures."""
        failures = 0
        for index, markup in enumerate(data.markups):
            if not markup.post_process_markup_rectangle(element, data.markups, index):
                failures += 1
                logger.warning(
                    "Post-process failed for %s in %s", markup.to_markup(), element.name
                )
        return failures

    def render(
        self, element: "ProjectLayoutElement", data: FormattedTextData, surface: "Surface"
    ) -> int:
        """Run every render hook. Returns the number of failures."""
        failures = 0
        for markup in data.markups:
            with surface.saved_state():
                ok = markup.render(element, surface)
            if not ok:
                failures += 1
                logger.warning(
                    "Render failed for %s in %s", markup.to_markup(), element.name
                )
        return failures

    def run(
        self, element: "ProjectLayoutElement", data: FormattedTextData, surface: "Surface"
    ) -> int:
        """Post-process then render. Returns the number of failed render hooks."""
        self.post_process(element, data)
        return self.render(element, data, surface)


@dataclass
class RenderResult:
    """Outcome of rendering one text block.

    Attributes:
        ok: False when the markup could not be used and the raw text was
            rendered instead
        markups: The markup elements that were rendered
        lines: The laid-out lines
        failed_renders: Number of render hooks that reported failure
        error: The parse or layout error that caused the fallback
    """

    ok: bool
    markups: list[MarkupBase] = field(default_factory=list)
    lines: list[LayoutLine] = field(default_factory=list)
    failed_renders: int = 0
    error: Optional[Exception] = None


class FormattedTextRenderer:
    """Render an element's formatted text onto a surface.

    Pipeline: tokenize, lay out, post-process, render. Drawing happens with
    the surface translated to the element's origin and clipped to its
    bounds, so markup geometry is element-local. If the text cannot be
    parsed or laid out, the raw text is rendered literally instead.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        base_dir: Optional[Path] = None,
        tokenizer: Optional[Tokenizer] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.tokenizer = tokenizer or Tokenizer()
        self.layout_engine = LayoutEngine(self.settings, base_dir=base_dir)
        self.coordinator = RenderPassCoordinator()

    def prepare(
        self,
        element: "ProjectLayoutElement",
        text: str,
        surface: "Surface",
        literal: bool = False,
    ) -> FormattedTextData:
        """Tokenize and lay out text without drawing it.

        Raises:
            MarkupParseError: If the markup cannot be parsed
            LayoutAbort: If a markup element fails during layout
        """
        data = FormattedTextData(self.tokenizer.tokenize(text, literal=literal))
        self.layout_engine.layout(element, data, surface)
        return data

    def render(
        self,
        element: "ProjectLayoutElement",
        text: str,
        surface: "Surface",
        literal: bool = False,
    ) -> RenderResult:
        """Render text into the element's bounds on the surface."""
        error: Optional[Exception] = None
        try:
            data = self.prepare(element, text, surface, literal=literal)
        except (MarkupParseError, LayoutAbort) as e:
            logger.warning(
                "Could not render formatted text for %s, using plain text: %s",
                element.name,
                e,
            )
            error = e
            data = self.prepare(element, text, surface, literal=True)

        with surface.saved_state():
            surface.translate(element.x, element.y)
            surface.set_clip(RectF(0, 0, element.width, element.height))
            failed = self.coordinator.run(element, data, surface)

        return RenderResult(
            ok=error is None,
            markups=data.markups,
            lines=data.lines,
            failed_renders=failed,
            error=error,
        )
