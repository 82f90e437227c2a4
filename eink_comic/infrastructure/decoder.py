from __future__ import annotations

from typing import Iterable, Iterator

from PIL import Image, ImageFile

from ..rendering.session import End, Error, Event, Pixel, Start


def iter_chunks(data: bytes, chunk_size: int) -> Iterator[bytes]:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    for offset in range(0, len(data), chunk_size):
        yield data[offset:offset + chunk_size]


def decode_png(chunks: Iterable[bytes]) -> Iterator[Event]:
    """Turn an encoded image byte stream into render-session events.

    Chunks are fed to Pillow's incremental parser in order. Any parser
    failure is reported as a single ``Error`` event rather than raised, so
    the render session decides how to unwind. Pixels come out one at a time,
    1x1, in raster order.

    Pillow buffers the whole encoded stream and then the decoded RGBA image,
    so memory here grows with the image area; only the render session itself
    is bounded by the image width. Decode failures therefore surface before
    ``Start``, never partway through the pixel stream.
    """

    parser = ImageFile.Parser()
    try:
        for chunk in chunks:
            parser.feed(chunk)
        image = parser.close()
        rgba = image.convert("RGBA")
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        yield Error(f"Cannot decode image: {exc}")
        return

    width, height = rgba.size
    yield Start(width, height)
    pixels = rgba.load()
    for y in range(height):
        for x in range(width):
            yield Pixel(x, y, 1, 1, pixels[x, y])
    yield End()
