from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PIL import Image

from ..errors import CanvasReleasedError

_BIT_MASKS = tuple(1 << (7 - i) for i in range(8))


def stride_for(width_px: int) -> int:
    return (width_px + 7) // 8


@dataclass(frozen=True)
class Frame:
    """Finished framebuffer as handed to the panel driver."""

    data: bytes
    width_px: int
    height_px: int
    stride_bytes: int

    def to_image(self) -> Image.Image:
        # Pillow's "1" raw layout matches ours: MSB first, byte-padded rows, 1 = white.
        return Image.frombytes("1", (self.width_px, self.height_px), self.data)


class Canvas:
    """Bit-packed monochrome framebuffer sized to the panel.

    Pixel ``(x, y)`` lives in ``buffer[x // 8 + y * stride_bytes]`` under the
    mask ``1 << (7 - x % 8)``. A set bit is white; a fresh canvas is all white.
    Writes outside the panel are dropped.
    """

    def __init__(self, width_px: int, height_px: int) -> None:
        if width_px <= 0 or height_px <= 0:
            raise ValueError(f"Invalid canvas size {width_px}x{height_px}")
        self.width_px = width_px
        self.height_px = height_px
        self.stride_bytes = stride_for(width_px)
        self._buffer: Optional[bytearray] = bytearray(b"\xff" * (self.stride_bytes * height_px))

    @property
    def buffer(self) -> bytearray:
        if self._buffer is None:
            raise CanvasReleasedError("Canvas buffer has been released")
        return self._buffer

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width_px and 0 <= y < self.height_px

    def set_pixel(self, x: int, y: int, bit: int) -> None:
        buffer = self.buffer
        if not self.contains(x, y):
            return
        index = (x >> 3) + y * self.stride_bytes
        if bit:
            buffer[index] |= _BIT_MASKS[x & 7]
        else:
            buffer[index] &= ~_BIT_MASKS[x & 7] & 0xFF

    def clear_pixel(self, x: int, y: int) -> None:
        self.set_pixel(x, y, 0)

    def get_pixel(self, x: int, y: int) -> Optional[int]:
        buffer = self.buffer
        if not self.contains(x, y):
            return None
        return 1 if buffer[(x >> 3) + y * self.stride_bytes] & _BIT_MASKS[x & 7] else 0

    def snapshot(self) -> Frame:
        return Frame(bytes(self.buffer), self.width_px, self.height_px, self.stride_bytes)

    def release(self) -> None:
        self._buffer = None
