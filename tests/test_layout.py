"""Tests for the layout engine."""

import pytest

from cardsmith.formatting.geometry import RectF
from cardsmith.formatting.layout import LayoutAbort, LayoutEngine
from cardsmith.formatting.markup import MarkupBase, TextMarkup
from cardsmith.formatting.state import Alignment, FormattedTextData
from cardsmith.formatting.tokenizer import Tokenizer
from cardsmith.project.model import ProjectLayoutElement


def layout(text: str, element, surface, settings, base_dir=None) -> FormattedTextData:
    data = FormattedTextData(Tokenizer().tokenize(text))
    LayoutEngine(settings, base_dir=base_dir).layout(element, data, surface)
    return data


def words(data: FormattedTextData) -> list[TextMarkup]:
    return [m for m in data.markups if isinstance(m, TextMarkup)]


class TestWrapping:
    """Tests for line breaking."""

    def test_single_line(self, element, surface, settings):
        data = layout("ab cd", element, surface, settings)

        assert len(data.lines) == 1
        first, second = words(data)
        assert first.target_rect == RectF(0, 0, 10, 10)
        assert second.target_rect == RectF(15, 0, 10, 10)

    def test_wraps_when_word_does_not_fit(self, surface, settings):
        """Each character is 5px wide; a 30px element fits 'aaaa' but not ' bb'."""
        element = ProjectLayoutElement(name="e", width=30, height=100)

        data = layout("aaaa bb", element, surface, settings)

        assert len(data.lines) == 2
        first, second = words(data)
        assert first.target_rect.y == 0
        assert second.target_rect == RectF(0, 10, 10, 10)

    def test_runs_after_wrapped_word_follow_it(self, surface, settings):
        element = ProjectLayoutElement(name="e", width=30, height=100)

        data = layout("aaaa bb  cc", element, surface, settings)

        # 'bb' wraps; the double space and 'cc' follow it on line two
        second_line = data.lines[1]
        assert [data.markups[i].to_markup() for i in second_line.indices] == ["bb", "  ", "cc"]

    def test_overlong_word_gets_its_own_line(self, surface, settings):
        element = ProjectLayoutElement(name="e", width=20, height=100)

        data = layout("a abcdefgh b", element, surface, settings)

        assert len(data.lines) == 3
        long_word = words(data)[1]
        assert long_word.target_rect == RectF(0, 10, 40, 10)

    def test_explicit_break(self, element, surface, settings):
        data = layout("a<br>b", element, surface, settings)

        assert len(data.lines) == 2
        assert words(data)[1].target_rect.y == 10

    def test_consecutive_breaks_keep_blank_line(self, element, surface, settings):
        data = layout("a\n\nb", element, surface, settings)

        assert len(data.lines) == 3
        assert words(data)[1].target_rect.y == 20

    def test_line_height_is_tallest_run(self, element, surface, settings):
        data = layout("a<size:20>b</size>", element, surface, settings)

        small, large = words(data)
        assert small.target_rect.height == 20
        assert large.target_rect.height == 20
        assert small.text_height == 10

    def test_line_spacing(self, element, surface, settings):
        data = layout("<ls:4>a<br>b", element, surface, settings)

        assert words(data)[1].target_rect.y == 14

    def test_tags_have_no_geometry(self, element, surface, settings):
        data = layout("<b>a</b>", element, surface, settings)

        assert data.markups[0].target_rect.is_empty
        assert data.markups[2].target_rect.is_empty


class TestStyleState:
    """Tests for style changes captured by text runs."""

    def test_bold_scope(self, element, surface, settings):
        data = layout("a<b>b</b>c", element, surface, settings)

        a, b, c = words(data)
        assert not a.font.bold
        assert b.font.bold
        assert not c.font.bold

    def test_interleaved_scopes_restore_own_flag(self, element, surface, settings):
        data = layout("<b><i>x</b>y</i>z", element, surface, settings)

        x, y, z = words(data)
        assert x.font.bold and x.font.italic
        assert not y.font.bold and y.font.italic
        assert not z.font.bold and not z.font.italic

    def test_color_scope(self, element, surface, settings):
        data = layout("<color:red>a</color>b", element, surface, settings)

        a, b = words(data)
        assert a.color == (255, 0, 0, 255)
        assert b.color == (0, 0, 0, 255)

    def test_font_scope_keeps_size_when_omitted(self, element, surface, settings):
        data = layout("<font:Serif>a</font>b", element, surface, settings)

        a, b = words(data)
        assert (a.font.family, a.font.size) == ("Serif", 10)
        assert b.font.family == "TestSans"

    def test_font_close_keeps_inner_size_scope(self, element, surface, settings):
        """Closing a family-only font leaves a still-open size scope in effect."""
        data = layout("<font:Other><size:20>a</font>b</size>c", element, surface, settings)

        a, b, c = words(data)
        assert (a.font.family, a.font.size) == ("Other", 20)
        assert (b.font.family, b.font.size) == ("TestSans", 20)
        assert c.font.size == 10

    def test_font_close_restores_size_it_set(self, element, surface, settings):
        data = layout("<font:Other;16>a</font>b", element, surface, settings)

        a, b = words(data)
        assert a.font.size == 16
        assert (b.font.family, b.font.size) == ("TestSans", 10)

    def test_element_font_string(self, surface, settings):
        element = ProjectLayoutElement(name="e", width=100, height=50, font="Mono;8;1;0;1;0")

        data = layout("a", element, surface, settings)

        font = words(data)[0].font
        assert (font.family, font.size, font.bold, font.italic) == ("Mono", 8, True, True)

    def test_element_color(self, surface, settings):
        element = ProjectLayoutElement(name="e", width=100, height=50, color="#00FF00")

        data = layout("a", element, surface, settings)

        assert words(data)[0].color == (0, 255, 0, 255)


class TestAlignment:
    """Tests for horizontal and vertical alignment."""

    def test_center(self, element, surface, settings):
        data = layout("<align:center>ab</align>", element, surface, settings)

        assert words(data)[0].target_rect.x == 45
        assert data.lines[0].alignment is Alignment.CENTER

    def test_right_ignores_trailing_space(self, element, surface, settings):
        data = layout("<align:right>ab </align>", element, surface, settings)

        assert words(data)[0].target_rect.x == 90

    def test_element_alignment(self, surface, settings):
        element = ProjectLayoutElement(name="e", width=100, height=20, align="right")

        data = layout("ab", element, surface, settings)

        assert words(data)[0].target_rect.x == 90

    def test_alignment_taken_from_line_start(self, element, surface, settings):
        data = layout("a<align:center>b</align><br>c", element, surface, settings)

        assert data.lines[0].alignment is Alignment.LEFT
        assert words(data)[1].target_rect.x == 5

    @pytest.mark.parametrize("vertical, expected", [("top", 0), ("middle", 15), ("bottom", 30)])
    def test_vertical_alignment(self, surface, settings, vertical: str, expected: float):
        element = ProjectLayoutElement(name="e", width=100, height=50, vertical_align=vertical)

        data = layout("a<br>b", element, surface, settings)

        assert words(data)[0].target_rect.y == expected
        assert data.lines[0].top == expected


class TestElementStyleFallback:
    """Tests for element style values that cannot be parsed."""

    def test_unknown_alignment_uses_left(self, surface, settings, caplog):
        element = ProjectLayoutElement(name="e", width=100, height=20, align="centre")

        data = layout("ab", element, surface, settings)

        assert words(data)[0].target_rect.x == 0
        assert "Invalid alignment" in caplog.text

    def test_unknown_vertical_alignment_stays_top(self, surface, settings, caplog):
        element = ProjectLayoutElement(name="e", width=100, height=50, vertical_align="center")

        data = layout("a", element, surface, settings)

        assert words(data)[0].target_rect.y == 0
        assert "Invalid vertical alignment" in caplog.text

    def test_bad_color_uses_default(self, surface, settings, caplog):
        element = ProjectLayoutElement(name="e", width=100, height=20, color="not-a-colour")

        data = layout("a", element, surface, settings)

        assert words(data)[0].color == (0, 0, 0, 255)
        assert "Invalid color" in caplog.text

    @pytest.mark.parametrize("font", ["Mono;big", "Mono;0"])
    def test_bad_font_uses_default(self, surface, settings, font: str):
        element = ProjectLayoutElement(name="e", width=100, height=20, font=font)

        data = layout("a", element, surface, settings)

        spec = words(data)[0].font
        assert (spec.family, spec.size) == ("TestSans", 10)


class TestSpacingMarkup:
    """Tests for spacing and positioning tags."""

    def test_fixed_space(self, element, surface, settings):
        data = layout("a<spc:7>b", element, surface, settings)

        assert words(data)[1].target_rect.x == 12

    def test_push_grows_line(self, element, surface, settings):
        data = layout("a<push:3;25>b", element, surface, settings)

        assert data.lines[0].height == 25
        assert words(data)[1].target_rect.x == 8

    def test_offset_captured_but_geometry_unchanged(self, element, surface, settings):
        data = layout("<offset:2;3>a</offset>", element, surface, settings)

        a = words(data)[0]
        assert a.offset == (2, 3)
        assert a.target_rect.x == 0


class TestBullets:
    """Tests for bulleted lines."""

    def test_bullet_starts_new_line(self, element, surface, settings):
        data = layout("intro<bullet>item", element, surface, settings)

        assert len(data.lines) == 2
        item = words(data)[1]
        # '• ' is two characters wide
        assert item.target_rect == RectF(10, 10, 20, 10)

    def test_wrapped_lines_use_hanging_indent(self, surface, settings):
        element = ProjectLayoutElement(name="e", width=40, height=100)

        data = layout("<bullet:-;8>aaaa bbbb<br>cc", element, surface, settings)

        aaaa, bbbb, cc = words(data)
        assert aaaa.target_rect.x == 8
        assert bbbb.target_rect.x == 8
        assert bbbb.target_rect.y == 10
        assert cc.target_rect.x == 0


class TestImages:
    """Tests for inline images."""

    def test_image_scaled_to_line_height(self, element, surface, settings, sample_image):
        data = layout(f"a<img:{sample_image.name}>", element, surface, settings, base_dir=sample_image.parent)

        image = data.markups[1]
        assert image.draw_size == (20, 10)
        assert image.target_rect == RectF(5, 0, 20, 10)

    def test_image_width_keeps_aspect(self, element, surface, settings, sample_image):
        data = layout(f"<img:{sample_image};40>", element, surface, settings)

        assert data.markups[0].draw_size == (40, 20)

    def test_missing_image_aborts_layout(self, element, surface, settings, tmp_path):
        with pytest.raises(LayoutAbort) as info:
            layout("a <img:missing.png> b", element, surface, settings, base_dir=tmp_path)

        assert info.value.index == 2


class TestLayoutAbort:
    """Tests for hooks that fail during layout."""

    def test_false_from_hook_aborts(self, element, surface, settings):
        class Failing(MarkupBase):
            tag_name = "fail"

            def __init__(self, arguments: str = "") -> None:
                super().__init__()

            def process_markup(self, element, data, process_data, surface) -> bool:
                return False

        data = FormattedTextData([TextMarkup("a"), Failing()])

        with pytest.raises(LayoutAbort) as info:
            LayoutEngine(settings).layout(element, data, surface)

        assert info.value.index == 1
        assert isinstance(info.value.markup, Failing)
