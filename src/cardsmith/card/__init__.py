"""Card composition from layouts and card data."""

from cardsmith.card.deck import Deck, resolve_text
from cardsmith.card.renderer import CardRenderer, RenderError

__all__ = [
    "Deck",
    "resolve_text",
    "CardRenderer",
    "RenderError",
]
