"""Monochrome rendering core: dithering, canvas, text layout and the render session."""

from .canvas import Canvas, Frame, stride_for
from .dither import dither_pixel, is_transparent, luminance
from .glyphs import DEFAULT_GLYPHS, GLYPH_HEIGHT, GLYPH_WIDTH, GlyphTable
from .session import (
    Caption,
    End,
    Error,
    Event,
    ImagePlacement,
    PanelDriver,
    Pixel,
    RenderSession,
    RenderState,
    Start,
    render_events,
)
from .text import draw_wrapped_text, line_origin_x, text_block_height, wrap_text

__all__ = [
    "Canvas",
    "Frame",
    "stride_for",
    "dither_pixel",
    "is_transparent",
    "luminance",
    "DEFAULT_GLYPHS",
    "GLYPH_HEIGHT",
    "GLYPH_WIDTH",
    "GlyphTable",
    "Caption",
    "End",
    "Error",
    "Event",
    "ImagePlacement",
    "PanelDriver",
    "Pixel",
    "RenderSession",
    "RenderState",
    "Start",
    "render_events",
    "draw_wrapped_text",
    "line_origin_x",
    "text_block_height",
    "wrap_text",
]
