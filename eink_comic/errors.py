"""Exception types shared by the renderer and its collaborators."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for failures that abort a single render."""


class DecodeError(RenderError):
    """The decode stream was malformed, truncated or out of order."""


class AllocationError(RenderError):
    """The canvas or dither line buffers could not be allocated."""


class SessionStateError(RenderError):
    """An event arrived that the session cannot accept in its current state."""


class CanvasReleasedError(RenderError):
    """The canvas buffer was used after ``release()``."""


class FetchError(Exception):
    """The comic metadata or image could not be retrieved."""


class MetadataError(FetchError):
    """The metadata document is missing a required field."""
