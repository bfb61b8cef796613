"""Abstract base class for card exporters."""

from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image


class Exporter(ABC):
    """Abstract base class for card exporters.

    Each exporter writes a list of rendered card images to a target path
    in its own format.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.pdf',))."""
        ...

    @abstractmethod
    def write(self, cards: list[Image.Image], path: Path, dpi: int) -> list[Path]:
        """Write card images.

        Args:
            cards: Rendered card images in deck order
            path: Target path
            dpi: Resolution the cards were designed at

        Returns:
            The files that were written
        """
        ...
