from __future__ import annotations

import io
import threading
from typing import Optional

from ..rendering.canvas import Frame


def frame_to_png(frame: Frame) -> bytes:
    buffer = io.BytesIO()
    frame.to_image().save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


class MemoryPanel:
    """Panel driver that keeps the last delivered frame for clients to pull."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frame: Optional[Frame] = None
        self.deliveries = 0

    def display(self, frame: Frame) -> None:
        with self._lock:
            self._frame = frame
            self.deliveries += 1

    def last_frame(self) -> Optional[Frame]:
        with self._lock:
            return self._frame


PANEL = MemoryPanel()
