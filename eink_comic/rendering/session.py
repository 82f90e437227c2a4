from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Tuple, Union

from ..config import SETTINGS, PanelSettings
from ..errors import AllocationError, DecodeError, SessionStateError
from .canvas import Canvas, Frame
from .dither import dither_pixel, is_transparent
from .glyphs import DEFAULT_GLYPHS, GlyphTable
from .text import draw_wrapped_text, text_block_height

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Start:
    width: int
    height: int


@dataclass(frozen=True)
class Pixel:
    x: int
    y: int
    w: int
    h: int
    rgba: Tuple[int, int, int, int]


@dataclass(frozen=True)
class End:
    pass


@dataclass(frozen=True)
class Error:
    message: str


Event = Union[Start, Pixel, End, Error]


class RenderState(enum.Enum):
    IDLE = "idle"
    AWAITING_DIMENSIONS = "awaiting_dimensions"
    RENDERING = "rendering"
    FLUSHED = "flushed"
    FAILED = "failed"


class PanelDriver(Protocol):
    def display(self, frame: Frame) -> None:
        ...


@dataclass(frozen=True)
class Caption:
    title: str
    comic_number: int
    alt_text: str

    @property
    def header(self) -> str:
        return f"#{self.comic_number}: {self.title}"


@dataclass(frozen=True)
class ImagePlacement:
    image_width: int
    image_height: int
    x_offset: int
    y_offset: int

    @classmethod
    def centered(cls, canvas_width: int, canvas_height: int, image_width: int, image_height: int) -> "ImagePlacement":
        return cls(
            image_width=image_width,
            image_height=image_height,
            x_offset=(canvas_width - image_width) // 2,
            y_offset=(canvas_height - image_height) // 2,
        )

    @property
    def bottom(self) -> int:
        return self.y_offset + self.image_height

    @property
    def clipped(self) -> bool:
        return self.x_offset < 0 or self.y_offset < 0


class RenderSession:
    """One render of a decode-event stream onto a panel-sized canvas.

    The session owns the canvas and the dither line buffers from the start
    event until the finished frame has been handed to ``panel``. Sessions are
    single use: once flushed or failed they reject further events.
    """

    def __init__(
        self,
        panel: PanelDriver,
        caption: Optional[Caption] = None,
        *,
        glyph_table: GlyphTable = DEFAULT_GLYPHS,
        settings: PanelSettings = SETTINGS,
    ) -> None:
        self._panel = panel
        self.caption = caption
        self.glyph_table = glyph_table
        self.width_px = settings.panel_width
        self.height_px = settings.panel_height
        self.max_text_columns = settings.max_text_columns

        self.state = RenderState.IDLE
        self.placement: Optional[ImagePlacement] = None
        self.canvas: Optional[Canvas] = None
        self.frame: Optional[Frame] = None
        self.rows_flushed = 0
        self.transparent_pixels = 0

        self._current_row: Optional[List[int]] = None
        self._next_row: Optional[List[int]] = None
        self._row_bits: Optional[bytearray] = None
        self._next_x = 0
        self._next_y = 0

    def handle(self, event: Event) -> None:
        if self.state in (RenderState.FLUSHED, RenderState.FAILED):
            raise SessionStateError(f"Session already {self.state.value}; got {type(event).__name__}")
        try:
            if isinstance(event, Start):
                self._on_start(event)
            elif isinstance(event, Pixel):
                self._on_pixel(event)
            elif isinstance(event, End):
                self._on_end()
            elif isinstance(event, Error):
                raise DecodeError(event.message)
            else:
                raise DecodeError(f"Unknown decode event: {event!r}")
        except Exception:
            self._fail()
            raise

    def run(self, events: Iterable[Event]) -> Frame:
        for event in events:
            self.handle(event)
            if self.frame is not None:
                return self.frame
        self._fail()
        raise DecodeError("Decode stream ended without an end event")

    def _on_start(self, event: Start) -> None:
        if self.state is not RenderState.IDLE:
            raise DecodeError("Duplicate start event")
        if event.width <= 0 or event.height <= 0:
            raise DecodeError(f"Invalid image size {event.width}x{event.height}")

        self.state = RenderState.AWAITING_DIMENSIONS
        try:
            self.canvas = Canvas(self.width_px, self.height_px)
            self._current_row = [0] * event.width
            self._next_row = [0] * event.width
            self._row_bits = bytearray(event.width)
        except MemoryError as exc:
            self._release()
            raise AllocationError(
                f"Cannot allocate buffers for a {event.width}x{event.height} image"
            ) from exc

        self.placement = ImagePlacement.centered(self.width_px, self.height_px, event.width, event.height)
        logger.info(
            "Rendering %dx%d image on %dx%d panel at (%d, %d)",
            event.width,
            event.height,
            self.width_px,
            self.height_px,
            self.placement.x_offset,
            self.placement.y_offset,
        )
        if self.placement.clipped:
            logger.warning(
                "Image %dx%d exceeds the %dx%d panel; it will be clipped",
                event.width,
                event.height,
                self.width_px,
                self.height_px,
            )

        self._draw_header()
        self.state = RenderState.RENDERING

    def _on_pixel(self, event: Pixel) -> None:
        if self.state is not RenderState.RENDERING:
            raise DecodeError("Pixel event before start event")
        placement = self.placement
        if event.y >= placement.image_height:
            raise DecodeError(
                f"Pixel ({event.x}, {event.y}) is outside the "
                f"{placement.image_width}x{placement.image_height} image"
            )
        if event.x != self._next_x or event.y != self._next_y:
            raise DecodeError(
                f"Pixel ({event.x}, {event.y}) out of raster order; expected ({self._next_x}, {self._next_y})"
            )

        if is_transparent(event.rgba):
            self.transparent_pixels += 1

        width = placement.image_width
        self._row_bits[event.x] = dither_pixel(self._current_row, self._next_row, event.x, width, event.rgba)

        if event.x == width - 1:
            self._flush_row(event.y)
            self._next_x = 0
            self._next_y += 1
        else:
            self._next_x += 1

    def _flush_row(self, y: int) -> None:
        placement = self.placement
        canvas = self.canvas
        canvas_y = placement.y_offset + y
        if 0 <= canvas_y < canvas.height_px:
            x_offset = placement.x_offset
            for x, bit in enumerate(self._row_bits):
                canvas.set_pixel(x_offset + x, canvas_y, bit)

        self._current_row, self._next_row = self._next_row, self._current_row
        self._next_row[:] = [0] * placement.image_width
        self.rows_flushed += 1

    def _on_end(self) -> None:
        if self.state is not RenderState.RENDERING:
            raise DecodeError("End event before start event")
        if self.rows_flushed != self.placement.image_height:
            raise DecodeError(
                f"Decode stream truncated after {self.rows_flushed} of {self.placement.image_height} rows"
            )

        self._draw_footer()
        frame = self.canvas.snapshot()
        try:
            self._panel.display(frame)
        finally:
            self._release()

        self.frame = frame
        self.state = RenderState.FLUSHED
        if self.transparent_pixels:
            logger.warning("Ignored transparency on %d pixels; dithered as opaque", self.transparent_pixels)
        logger.info("Frame delivered to panel (%d bytes)", len(frame.data))

    def _draw_header(self) -> None:
        if self.caption is None:
            return
        text = self.caption.header
        block = text_block_height(self.glyph_table, text, self.max_text_columns)
        start_y = max(0, (self.placement.y_offset - block) // 2)
        draw_wrapped_text(self.canvas, self.glyph_table, text, self.max_text_columns, start_y)

    def _draw_footer(self) -> None:
        if self.caption is None or not self.caption.alt_text:
            return
        text = self.caption.alt_text
        block = text_block_height(self.glyph_table, text, self.max_text_columns)
        bottom = self.placement.bottom
        margin = self.height_px - bottom
        start_y = max(0, min(bottom + (margin - block) // 2, self.height_px - block))
        draw_wrapped_text(self.canvas, self.glyph_table, text, self.max_text_columns, start_y)

    def _fail(self) -> None:
        if self.state is not RenderState.IDLE:
            logger.error("Render failed in state %s", self.state.value)
        self.state = RenderState.FAILED
        self._release()

    def _release(self) -> None:
        if self.canvas is not None:
            self.canvas.release()
            self.canvas = None
        self._current_row = None
        self._next_row = None
        self._row_bits = None


def render_events(
    events: Iterable[Event],
    panel: PanelDriver,
    caption: Optional[Caption] = None,
    *,
    glyph_table: GlyphTable = DEFAULT_GLYPHS,
    settings: PanelSettings = SETTINGS,
) -> Frame:
    session = RenderSession(panel, caption, glyph_table=glyph_table, settings=settings)
    return session.run(events)
