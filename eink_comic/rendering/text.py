from __future__ import annotations

from typing import List

from .canvas import Canvas
from .glyphs import GlyphTable


def wrap_text(text: str, max_columns: int) -> List[str]:
    """Split ``text`` into lines of at most ``max_columns`` characters.

    Lines break at the last space that keeps the line within the limit.
    Spaces at either end of a line are dropped, so runs of spaces never push
    a word onto a line of its own. A word longer than ``max_columns`` is
    hard-broken at ``max_columns``. Newlines always start a new line.
    """

    if max_columns < 1:
        raise ValueError(f"max_columns must be positive, got {max_columns}")

    lines: List[str] = []
    for paragraph in text.splitlines():
        remaining = paragraph.lstrip(" ")
        while len(remaining) > max_columns:
            cut = remaining.rfind(" ", 0, max_columns + 1)
            if cut > 0:
                lines.append(remaining[:cut].rstrip(" "))
                remaining = remaining[cut + 1:].lstrip(" ")
            else:
                lines.append(remaining[:max_columns])
                remaining = remaining[max_columns:]
        lines.append(remaining.rstrip(" "))
    return lines


def line_origin_x(canvas_width: int, line_length_px: int) -> int:
    return (canvas_width - line_length_px) // 2


def text_block_height(glyph_table: GlyphTable, text: str, max_columns: int) -> int:
    return len(wrap_text(text, max_columns)) * glyph_table.height


def draw_glyph(canvas: Canvas, glyph_table: GlyphTable, char: str, x: int, y: int) -> None:
    width = glyph_table.width
    for row, bits in enumerate(glyph_table.rows(char)):
        for col in range(width):
            ink = bits >> (width - 1 - col) & 1
            canvas.set_pixel(x + col, y + row, 0 if ink else 1)


def draw_wrapped_text(
    canvas: Canvas,
    glyph_table: GlyphTable,
    text: str,
    max_columns: int,
    start_y: int,
) -> int:
    """Draw ``text`` word-wrapped and centered, one glyph row per line.

    Returns the number of lines drawn. Anything falling off the canvas is
    clipped by the canvas itself.
    """

    lines = wrap_text(text, max_columns)
    for index, line in enumerate(lines):
        y = start_y + index * glyph_table.height
        x = line_origin_x(canvas.width_px, glyph_table.text_width(line))
        for offset, char in enumerate(line):
            draw_glyph(canvas, glyph_table, char, x + offset * glyph_table.width, y)
    return len(lines)
