"""Formatted text: markup parsing, layout and rendering."""

from cardsmith.formatting.geometry import RectF
from cardsmith.formatting.colors import translate_color_string, color_to_string
from cardsmith.formatting.state import (
    Alignment,
    VerticalAlignment,
    FormattedTextData,
    FormattedTextProcessData,
    LayoutLine,
)
from cardsmith.formatting.markup import MarkupBase, MarkupParseError, TAG_REGISTRY
from cardsmith.formatting.tokenizer import Tokenizer
from cardsmith.formatting.layout import LayoutAbort, LayoutEngine
from cardsmith.formatting.renderer import (
    FormattedTextRenderer,
    RenderPassCoordinator,
    RenderResult,
)

__all__ = [
    "RectF",
    "translate_color_string",
    "color_to_string",
    "Alignment",
    "VerticalAlignment",
    "FormattedTextData",
    "FormattedTextProcessData",
    "LayoutLine",
    "MarkupBase",
    "MarkupParseError",
    "TAG_REGISTRY",
    "Tokenizer",
    "LayoutAbort",
    "LayoutEngine",
    "FormattedTextRenderer",
    "RenderPassCoordinator",
    "RenderResult",
]
