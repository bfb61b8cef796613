"""Tests for the background colour markup."""

import pytest

from cardsmith.formatting.geometry import RectF
from cardsmith.formatting.markup import BackgroundColorMarkup, TextMarkup
from cardsmith.formatting.markup.close import CloseTagMarkup
from cardsmith.project.model import ProjectLayoutElement

RED = (255, 0, 0, 255)


def _text(rect: RectF) -> TextMarkup:
    markup = TextMarkup("x")
    markup.target_rect = rect
    return markup


class TestPostProcess:
    """Tests for collecting the enclosed rectangles."""

    def test_collects_until_own_close(self, element: ProjectLayoutElement):
        background = BackgroundColorMarkup("Red")
        inside = _text(RectF(0, 0, 10, 10))
        outside = _text(RectF(20, 0, 10, 10))
        markups = [background, inside, CloseTagMarkup(background), outside]

        assert background.post_process_markup_rectangle(element, markups, 0)
        assert background.rectangles == [RectF(0, 0, 10, 10)]

    def test_other_close_tags_do_not_stop_collection(self, element: ProjectLayoutElement):
        """Only the close tag bound to this markup ends the scope."""
        background = BackgroundColorMarkup("Red")
        other = BackgroundColorMarkup("Blue")
        markups = [
            background,
            other,
            _text(RectF(0, 0, 5, 5)),
            CloseTagMarkup(other),
            _text(RectF(5, 0, 5, 5)),
            CloseTagMarkup(background),
        ]

        background.post_process_markup_rectangle(element, markups, 0)

        assert len(background.rectangles) == 2

    def test_empty_scope_collects_nothing(self, element: ProjectLayoutElement):
        background = BackgroundColorMarkup("Red")
        markups = [background, CloseTagMarkup(background)]

        background.post_process_markup_rectangle(element, markups, 0)

        assert background.rectangles == []

    def test_unclosed_scope_runs_to_end(self, element: ProjectLayoutElement):
        background = BackgroundColorMarkup("Red")
        markups = [background, _text(RectF(0, 0, 5, 5)), _text(RectF(5, 0, 5, 5))]

        background.post_process_markup_rectangle(element, markups, 0)

        assert len(background.rectangles) == 2


class TestRender:
    """Tests for drawing the background."""

    def test_empty_scope_draws_nothing(self, element, surface):
        background = BackgroundColorMarkup("Red")
        background.post_process_markup_rectangle(
            element, [background, CloseTagMarkup(background)], 0
        )

        assert background.render(element, surface)
        assert surface.fills == []

    def test_extra_height_added(self, surface):
        element = ProjectLayoutElement(name="e", width=100, height=50)
        background = BackgroundColorMarkup("Red;4")
        background.rectangles = [RectF(0, 10, 20, 10)]

        background.render(element, surface)

        assert surface.fills[0][1] == RectF(0, 10, 20, 14)

    @pytest.mark.parametrize("extra", [0, 5, 15, 1000])
    def test_extra_height_clamped_to_element(self, surface, extra: int):
        """The fill never extends below the element bottom."""
        element = ProjectLayoutElement(name="e", width=100, height=20)
        top = 8
        background = BackgroundColorMarkup(f"Red;{extra}")
        background.rectangles = [RectF(0, top, 10, 10)]

        background.render(element, surface)

        drawn = surface.fills[0][1]
        assert drawn.height <= element.height - top
        assert drawn.height == min(10 + extra, element.height - top)

    def test_rectangle_below_element_skipped(self, surface):
        element = ProjectLayoutElement(name="e", width=100, height=20)
        background = BackgroundColorMarkup("Red")
        background.rectangles = [RectF(0, 25, 10, 10)]

        background.render(element, surface)

        assert surface.fills == []

    def test_smoothing_disabled_while_filling_and_restored(self, element, surface):
        surface.smoothing = True
        background = BackgroundColorMarkup("Red")
        background.rectangles = [RectF(0, 0, 10, 10), RectF(10, 0, 10, 10)]

        background.render(element, surface)

        assert [smoothing for _, _, smoothing in surface.fills] == [False, False]
        assert surface.smoothing is True

    def test_smoothing_restored_when_fill_fails(self, element, surface, monkeypatch):
        surface.smoothing = True
        background = BackgroundColorMarkup("Red")
        background.rectangles = [RectF(0, 0, 10, 10)]

        def broken_fill(color, rect):
            raise RuntimeError("device lost")

        monkeypatch.setattr(surface, "fill_rectangle", broken_fill)

        with pytest.raises(RuntimeError):
            background.render(element, surface)
        assert surface.smoothing is True

    def test_fill_is_drawn_in_color(self, element, surface):
        background = BackgroundColorMarkup("Red")
        background.rectangles = [RectF(2, 2, 6, 6)]

        background.render(element, surface)

        assert surface.image.getpixel((4, 4)) == RED
        assert surface.image.getpixel((12, 12)) == (255, 255, 255, 255)


class TestBackgroundPipeline:
    """End-to-end behaviour through the formatted text renderer."""

    def test_bold_run_example(self, text_renderer, surface):
        """Extra height 2 over a 10px run in a 20px element gives one 12px fill."""
        element = ProjectLayoutElement(name="e", width=100, height=20)

        result = text_renderer.render(
            element, "<bgcolor:Red;2><b>Hi</b><close>", surface
        )

        assert result.ok
        assert result.markups[2].target_rect == RectF(0, 0, 10, 10)
        assert surface.fills == [(RED, RectF(0, 0, 10, 12), False)]

    def test_background_drawn_before_enclosed_text(self, text_renderer, surface, element):
        """Render order follows token order, so text lands on top of the fill."""
        order = []
        surface.fill_rectangle = lambda color, rect: order.append("fill")
        surface.draw_text = lambda *args: order.append("text")

        text_renderer.render(element, "<bgcolor:Red>Hi<close>", surface)

        assert order == ["fill", "text"]
