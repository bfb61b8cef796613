"""Tests for RectF."""

from cardsmith.formatting.geometry import RectF


class TestRectF:
    """Tests for rectangle helpers."""

    def test_edges(self):
        rect = RectF(1, 2, 10, 20)

        assert rect.left == 1
        assert rect.top == 2
        assert rect.right == 11
        assert rect.bottom == 22

    def test_default_is_empty(self):
        assert RectF().is_empty

    def test_intersect_overlapping(self):
        result = RectF(0, 0, 10, 10).intersect(RectF(5, 5, 10, 10))

        assert result == RectF(5, 5, 5, 5)

    def test_intersect_disjoint_is_empty(self):
        assert RectF(0, 0, 5, 5).intersect(RectF(10, 10, 5, 5)).is_empty

    def test_union(self):
        result = RectF(0, 0, 5, 5).union(RectF(10, 10, 5, 5))

        assert result == RectF(0, 0, 15, 15)

    def test_union_ignores_empty(self):
        assert RectF().union(RectF(3, 3, 2, 2)) == RectF(3, 3, 2, 2)

    def test_offset_returns_copy(self):
        rect = RectF(1, 1, 2, 2)
        moved = rect.offset(3, 4)

        assert moved == RectF(4, 5, 2, 2)
        assert rect == RectF(1, 1, 2, 2)
