"""Pytest fixtures for Cardsmith tests."""

import pytest
from pathlib import Path

from PIL import Image

from cardsmith.config import Settings
from cardsmith.formatting.renderer import FormattedTextRenderer
from cardsmith.project.model import ProjectLayoutElement
from cardsmith.render.surface import Surface


class MetricsSurface(Surface):
    """Surface with fixed font metrics that records drawing calls.

    Every glyph is half the font size wide and a line is exactly the font
    size tall, so layout geometry is predictable.
    """

    def __init__(self, image: Image.Image) -> None:
        super().__init__(image)
        self.fills: list = []
        self.texts: list = []
        self.images: list = []

    def measure_text(self, text, spec) -> float:
        return len(text) * spec.size / 2

    def line_height(self, spec) -> float:
        return spec.size

    def ascent(self, spec) -> float:
        return spec.size * 0.8

    def fill_rectangle(self, color, rect) -> None:
        self.fills.append((color, rect.copy(), self.smoothing))
        super().fill_rectangle(color, rect)

    def draw_text(self, text, spec, color, x, y) -> None:
        self.texts.append((text, spec, color, x, y))

    def draw_image(self, image, rect) -> None:
        self.images.append((image.size, rect.copy()))
        super().draw_image(image, rect)


@pytest.fixture
def settings() -> Settings:
    """Settings with a predictable default font."""
    return Settings(
        default_font_family="TestSans",
        default_font_size=10.0,
        default_font_color="black",
    )


@pytest.fixture
def surface() -> MetricsSurface:
    """A 200x100 white metrics surface."""
    return MetricsSurface(Image.new("RGBA", (200, 100), (255, 255, 255, 255)))


@pytest.fixture
def element() -> ProjectLayoutElement:
    """A 100x20 text element at the origin."""
    return ProjectLayoutElement(name="body", width=100, height=20)


@pytest.fixture
def text_renderer(settings: Settings) -> FormattedTextRenderer:
    return FormattedTextRenderer(settings)


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    """A 20x10 blue PNG in a temporary directory."""
    path = tmp_path / "icon.png"
    Image.new("RGBA", (20, 10), (0, 0, 255, 255)).save(path)
    return path
