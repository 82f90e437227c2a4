from __future__ import annotations

from typing import MutableSequence, Sequence

# Floyd–Steinberg weights in sixteenths, applied in this order.
_WEIGHT_RIGHT = 7
_WEIGHT_BELOW_RIGHT = 1
_WEIGHT_BELOW_LEFT = 3
_WEIGHT_BELOW = 5

_THRESHOLD = 127


def luminance(rgba: Sequence[int]) -> int:
    """Integer form of ``0.3 R + 0.59 G + 0.11 B``; alpha is not consulted."""
    return (30 * rgba[0] + 59 * rgba[1] + 11 * rgba[2]) // 100


def is_transparent(rgba: Sequence[int]) -> bool:
    return len(rgba) > 3 and rgba[3] < 255


def dither_pixel(
    current_row: MutableSequence[int],
    next_row: MutableSequence[int],
    x: int,
    row_length: int,
    rgba: Sequence[int],
) -> int:
    """Quantize one pixel to a single bit and diffuse its error.

    ``current_row[x]`` holds the error already carried into this pixel. The
    quantization error is pushed to the unprocessed neighbours in
    ``current_row`` and ``next_row``; nothing else is touched.
    """

    value = current_row[x] + luminance(rgba)
    if value > 255:
        value = 255
    elif value < 0:
        value = 0

    bit = 1 if value > _THRESHOLD else 0
    quant_error = value - bit * 255

    if x + 1 < row_length:
        current_row[x + 1] += (quant_error * _WEIGHT_RIGHT) >> 4
        next_row[x + 1] += (quant_error * _WEIGHT_BELOW_RIGHT) >> 4
    if x > 0:
        next_row[x - 1] += (quant_error * _WEIGHT_BELOW_LEFT) >> 4
    next_row[x] += (quant_error * _WEIGHT_BELOW) >> 4

    return bit
