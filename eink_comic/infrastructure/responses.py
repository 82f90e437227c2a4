from __future__ import annotations

import io

from flask import Response, send_file

from ..rendering.canvas import Frame
from .panel import frame_to_png


def send_png(frame: Frame):
    return send_file(io.BytesIO(frame_to_png(frame)), mimetype="image/png")


def send_framebuffer(frame: Frame) -> Response:
    response = Response(frame.data, mimetype="application/octet-stream")
    response.headers["X-Panel-Width"] = str(frame.width_px)
    response.headers["X-Panel-Height"] = str(frame.height_px)
    response.headers["X-Panel-Stride"] = str(frame.stride_bytes)
    return response
