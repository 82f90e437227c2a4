import io
from dataclasses import replace

from PIL import Image

from eink_comic.config import SETTINGS
from eink_comic.infrastructure.decoder import decode_png, iter_chunks
from eink_comic.rendering.session import End, Error, Pixel, Start, render_events


def _png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()


def _checkerboard_png():
    image = Image.new("RGBA", (4, 2), (255, 255, 255, 255))
    for x, y in ((1, 0), (2, 0), (0, 1), (3, 1)):
        image.putpixel((x, y), (0, 0, 0, 255))
    return _png_bytes(image)


def test_iter_chunks_preserves_byte_order():
    data = bytes(range(20))
    chunks = list(iter_chunks(data, 7))

    assert [len(chunk) for chunk in chunks] == [7, 7, 6]
    assert b"".join(chunks) == data


def test_decode_emits_start_pixels_in_raster_order_and_end():
    events = list(decode_png(iter_chunks(_checkerboard_png(), 16)))

    assert events[0] == Start(4, 2)
    assert events[-1] == End()
    pixels = events[1:-1]
    assert all(isinstance(event, Pixel) for event in pixels)
    assert [(p.x, p.y) for p in pixels] == [(x, y) for y in range(2) for x in range(4)]
    assert pixels[0].rgba == (255, 255, 255, 255)
    assert pixels[1].rgba == (0, 0, 0, 255)


def test_decode_adds_opaque_alpha_to_rgb_sources():
    image = Image.new("RGB", (2, 1), (10, 20, 30))

    events = list(decode_png([_png_bytes(image)]))

    assert events[1].rgba == (10, 20, 30, 255)


def test_garbage_stream_yields_single_error_event():
    events = list(decode_png([b"definitely not a png"]))

    assert len(events) == 1
    assert isinstance(events[0], Error)


def test_truncated_stream_yields_error_event():
    image = Image.new("RGB", (32, 32))
    for y in range(32):
        for x in range(32):
            image.putpixel((x, y), ((x * 7 + y * 13) % 256, (x * y) % 256, (x ^ y) * 8 % 256))
    data = _png_bytes(image)

    events = list(decode_png(iter_chunks(data[: len(data) // 2], 64)))

    assert len(events) == 1
    assert isinstance(events[0], Error)


def test_decoded_png_renders_end_to_end():
    settings = replace(SETTINGS, panel_width=8, panel_height=8)

    class Panel:
        frames = []

        def display(self, frame):
            self.frames.append(frame)

    frame = render_events(decode_png(iter_chunks(_checkerboard_png(), 5)), Panel(), settings=settings)

    assert frame.data == b"\xff\xff\xff\xe7\xdb\xff\xff\xff"
