import pytest

from eink_comic.rendering.canvas import Canvas
from eink_comic.rendering.glyphs import DEFAULT_GLYPHS
from eink_comic.rendering.text import draw_wrapped_text, line_origin_x, text_block_height, wrap_text


def test_wrap_breaks_at_last_fitting_space():
    assert wrap_text("AAAA BBBB CCCC", 9) == ["AAAA BBBB", "CCCC"]


def test_wrap_keeps_short_text_on_one_line():
    assert wrap_text("AAAA BBBB", 9) == ["AAAA BBBB"]


def test_wrap_hard_breaks_overlong_words():
    assert wrap_text("ABCDEFGHIJ", 4) == ["ABCD", "EFGH", "IJ"]
    assert wrap_text("HI SUPERCALIFRAGILISTIC", 6) == ["HI", "SUPERC", "ALIFRA", "GILIST", "IC"]


def test_wrap_never_exceeds_max_columns():
    text = (
        "Sometimes I wonder if the alt text is really just a very long sentence "
        "that keeps going well past the edge of any reasonable display panel."
    )
    lines = wrap_text(text, 20)

    assert all(len(line) <= 20 for line in lines)
    assert " ".join(lines) == text


def test_wrap_does_not_split_words_around_double_spaces():
    assert wrap_text("AAAA  BBBB", 4) == ["AAAA", "BBBB"]
    assert wrap_text("AAAA  BBBB", 5) == ["AAAA", "BBBB"]
    assert wrap_text("It ends.  Then more", 8) == ["It ends.", "Then", "more"]


def test_wrap_drops_leading_and_trailing_spaces():
    assert wrap_text("   HELLO WORLD", 5) == ["HELLO", "WORLD"]
    assert wrap_text("  HI  ", 10) == ["HI"]


def test_wrap_honours_newlines():
    assert wrap_text("ONE\nTWO", 80) == ["ONE", "TWO"]


def test_wrap_empty_text_has_no_lines():
    assert wrap_text("", 10) == []


def test_wrap_rejects_non_positive_width():
    with pytest.raises(ValueError):
        wrap_text("text", 0)


@pytest.mark.parametrize(
    "canvas_width, line_length, expected",
    [(16, 6, 5), (17, 6, 5), (12, 6, 3), (13, 6, 3), (6, 6, 0)],
)
def test_line_origin_centers_for_even_and_odd_slack(canvas_width, line_length, expected):
    assert line_origin_x(canvas_width, line_length) == expected


def test_text_block_height_counts_wrapped_lines():
    assert text_block_height(DEFAULT_GLYPHS, "AAAA BBBB CCCC", 9) == 2 * DEFAULT_GLYPHS.height


def test_draw_wrapped_text_blits_inverted_glyphs_centered():
    canvas = Canvas(24, 16)
    canvas.clear_pixel(7, 2)

    lines = draw_wrapped_text(canvas, DEFAULT_GLYPHS, "HI", 80, 2)

    assert lines == 1
    # "HI" is 12 px wide, so it starts at x = 6.
    assert canvas.get_pixel(6, 2) == 0
    assert canvas.get_pixel(7, 2) == 1
    assert canvas.get_pixel(10, 2) == 0
    assert canvas.get_pixel(11, 2) == 1
    assert all(canvas.get_pixel(x, 5) == 0 for x in range(6, 11))
    assert canvas.get_pixel(0, 0) == 1
    assert canvas.get_pixel(5, 2) == 1


def test_draw_wrapped_text_stacks_lines_by_glyph_height():
    canvas = Canvas(60, 20)

    lines = draw_wrapped_text(canvas, DEFAULT_GLYPHS, "AAAA BBBB CCCC", 9, 0)

    assert lines == 2
    # "CCCC" is 24 px wide: x = 18, second line at y = 8.
    assert canvas.get_pixel(18, 8) == 1
    assert canvas.get_pixel(19, 8) == 0
    assert all(canvas.get_pixel(x, 16) == 1 for x in range(60))


def test_draw_wrapped_text_clips_at_canvas_edges():
    canvas = Canvas(12, 6)

    draw_wrapped_text(canvas, DEFAULT_GLYPHS, "WIDE TEXT", 80, -3)

    assert len(canvas.buffer) == canvas.stride_bytes * 6
