"""Pillow-backed drawing surface.

The surface carries transient drawing state (smoothing, translation and
clip) that markup render hooks may change. ``saved_state`` restores that
state on every exit path.
"""

import math
from contextlib import contextmanager
from typing import Iterator, Optional

from PIL import Image, ImageChops, ImageDraw

from cardsmith.formatting.colors import RGBA
from cardsmith.formatting.geometry import RectF
from cardsmith.render.fonts import FontCache, FontSpec

# Supersampling factor for smoothed rectangle edges
SMOOTHING_SCALE = 4


class Surface:
    """A drawing target wrapping an RGBA Pillow image.

    Coordinates passed to drawing methods are local; the current
    translation maps them to image pixels and the clip (in image pixels)
    limits what is touched.
    """

    def __init__(self, image: Image.Image, font_cache: Optional[FontCache] = None) -> None:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self.image = image
        self.font_cache = font_cache or FontCache()
        self.smoothing = True
        self.translation: tuple[float, float] = (0.0, 0.0)
        self.clip: Optional[RectF] = None

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        color: RGBA = (255, 255, 255, 255),
        font_cache: Optional[FontCache] = None,
    ) -> "Surface":
        """Create a surface over a new image filled with a colour."""
        return cls(Image.new("RGBA", (width, height), color), font_cache)

    # ------------------------------------------------------------------
    # Transient state
    # ------------------------------------------------------------------

    @contextmanager
    def saved_state(self) -> Iterator["Surface"]:
        """Save smoothing, translation and clip; restore them on exit."""
        state = (self.smoothing, self.translation, self.clip)
        try:
            yield self
        finally:
            self.smoothing, self.translation, self.clip = state

    def translate(self, dx: float, dy: float) -> None:
        tx, ty = self.translation
        self.translation = (tx + dx, ty + dy)

    def set_clip(self, rect: RectF) -> None:
        """Clip to a local rectangle, intersected with any existing clip."""
        device = self._to_device(rect)
        self.clip = device if self.clip is None else self.clip.intersect(device)

    def _to_device(self, rect: RectF) -> RectF:
        tx, ty = self.translation
        return rect.offset(tx, ty)

    def _drawable_area(self) -> RectF:
        bounds = RectF(0, 0, self.image.width, self.image.height)
        return bounds if self.clip is None else bounds.intersect(self.clip)

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def font(self, spec: FontSpec):
        return self.font_cache.get(spec)

    def measure_text(self, text: str, spec: FontSpec) -> float:
        """Advance width of text in the given font."""
        if not text:
            return 0.0
        return float(self.font(spec).getlength(text))

    def line_height(self, spec: FontSpec) -> float:
        """Height of one line of text (ascent + descent)."""
        ascent, descent = self.font(spec).getmetrics()
        return float(ascent + descent)

    def ascent(self, spec: FontSpec) -> float:
        return float(self.font(spec).getmetrics()[0])

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def fill_rectangle(self, color: RGBA, rect: RectF) -> None:
        """Fill a local rectangle.

        With smoothing disabled the edges snap to whole pixels; with it
        enabled partially covered pixels are blended.
        """
        area = self._to_device(rect).intersect(self._drawable_area())
        if area.is_empty:
            return

        if not self.smoothing:
            left, top = round(area.left), round(area.top)
            right, bottom = round(area.right), round(area.bottom)
            if right <= left or bottom <= top:
                return
            draw = ImageDraw.Draw(self.image, "RGBA")
            draw.rectangle([left, top, right - 1, bottom - 1], fill=color)
            return

        left, top = math.floor(area.left), math.floor(area.top)
        width = math.ceil(area.right) - left
        height = math.ceil(area.bottom) - top
        mask = Image.new("L", (width * SMOOTHING_SCALE, height * SMOOTHING_SCALE), 0)
        ImageDraw.Draw(mask).rectangle(
            [
                (area.left - left) * SMOOTHING_SCALE,
                (area.top - top) * SMOOTHING_SCALE,
                (area.right - left) * SMOOTHING_SCALE - 1,
                (area.bottom - top) * SMOOTHING_SCALE - 1,
            ],
            fill=255,
        )
        coverage = mask.resize((width, height), Image.Resampling.BOX)
        patch = Image.new("RGBA", (width, height), color)
        patch.putalpha(ImageChops.multiply(patch.getchannel("A"), coverage))
        self._composite(patch, left, top)

    def draw_text(self, text: str, spec: FontSpec, color: RGBA, x: float, y: float) -> None:
        """Draw text with its top-left (ascender line) at local (x, y)."""
        if not text:
            return
        font = self.font(spec)
        bbox = font.getbbox(text)
        left, top = math.floor(bbox[0]), math.floor(bbox[1])
        right, bottom = math.ceil(bbox[2]), math.ceil(bbox[3])
        if right <= left or bottom <= top:
            return
        patch = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
        draw = ImageDraw.Draw(patch)
        draw.fontmode = "L" if self.smoothing else "1"
        draw.text((-left, -top), text, font=font, fill=color)

        tx, ty = self.translation
        self._composite(patch, round(x + tx + left), round(y + ty + top))

    def draw_horizontal_line(
        self, color: RGBA, x1: float, x2: float, y: float, thickness: float = 1.0
    ) -> None:
        """Draw a horizontal line centred on local y."""
        self.fill_rectangle(
            color, RectF(min(x1, x2), y - thickness / 2, abs(x2 - x1), thickness)
        )

    def draw_image(self, image: Image.Image, rect: RectF) -> None:
        """Draw an image scaled into a local rectangle."""
        width, height = round(rect.width), round(rect.height)
        if width <= 0 or height <= 0:
            return
        patch = image.convert("RGBA")
        if patch.size != (width, height):
            patch = patch.resize((width, height), Image.Resampling.LANCZOS)
        tx, ty = self.translation
        self._composite(patch, round(rect.x + tx), round(rect.y + ty))

    def _composite(self, patch: Image.Image, x: int, y: int) -> None:
        """Alpha-composite a patch at image pixel (x, y), honouring the clip."""
        area = self._drawable_area()
        placed = RectF(x, y, patch.width, patch.height).intersect(area)
        left, top = math.ceil(placed.left), math.ceil(placed.top)
        right, bottom = math.floor(placed.right), math.floor(placed.bottom)
        if placed.is_empty or right <= left or bottom <= top:
            return
        if (left, top, right, bottom) != (x, y, x + patch.width, y + patch.height):
            patch = patch.crop((left - x, top - y, right - x, bottom - y))
        self.image.alpha_composite(patch, (left, top))
