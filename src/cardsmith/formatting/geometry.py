"""Float rectangle used for laid-out markup geometry."""

from dataclasses import dataclass


@dataclass
class RectF:
    """A rectangle with float coordinates.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        """Check if the rectangle covers no area."""
        return self.width <= 0 or self.height <= 0

    def copy(self) -> "RectF":
        return RectF(self.x, self.y, self.width, self.height)

    def offset(self, dx: float, dy: float) -> "RectF":
        """Return a copy moved by (dx, dy)."""
        return RectF(self.x + dx, self.y + dy, self.width, self.height)

    def intersect(self, other: "RectF") -> "RectF":
        """Return the overlapping area (empty if the rectangles are disjoint)."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return RectF(left, top, 0.0, 0.0)
        return RectF(left, top, right - left, bottom - top)

    def union(self, other: "RectF") -> "RectF":
        """Return the smallest rectangle containing both rectangles."""
        if self.is_empty:
            return other.copy()
        if other.is_empty:
            return self.copy()
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        return RectF(
            left,
            top,
            max(self.right, other.right) - left,
            max(self.bottom, other.bottom) - top,
        )
