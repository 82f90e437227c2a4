"""Collaborators around the renderer: fetching, storage, decoding and panel hand-off."""

from .decoder import decode_png, iter_chunks
from .network import ComicFetcher, ComicMetadata
from .panel import PANEL, MemoryPanel, frame_to_png
from .responses import send_framebuffer, send_png
from .store import ComicStore

__all__ = [
    "decode_png",
    "iter_chunks",
    "ComicFetcher",
    "ComicMetadata",
    "PANEL",
    "MemoryPanel",
    "frame_to_png",
    "send_framebuffer",
    "send_png",
    "ComicStore",
]
