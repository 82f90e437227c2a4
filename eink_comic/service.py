from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .config import SETTINGS, PanelSettings
from .errors import DecodeError, FetchError
from .infrastructure.decoder import decode_png, iter_chunks
from .infrastructure.network import ComicFetcher, ComicMetadata
from .infrastructure.panel import PANEL
from .infrastructure.store import ComicStore
from .rendering.canvas import Frame
from .rendering.session import Caption, PanelDriver, render_events

logger = logging.getLogger(__name__)

# One render session against the panel at a time.
_RENDER_LOCK = threading.Lock()


@dataclass(frozen=True)
class RefreshResult:
    number: int
    fetched_image: bool
    frame: Frame


class ComicService:
    def __init__(
        self,
        fetcher: Optional[ComicFetcher] = None,
        store: Optional[ComicStore] = None,
        panel: Optional[PanelDriver] = None,
        settings: PanelSettings = SETTINGS,
    ) -> None:
        self.settings = settings
        self.fetcher = fetcher or ComicFetcher(settings=settings)
        self.store = store or ComicStore(settings.state_dir)
        self.panel = panel or PANEL
        self.refresh_count = 0

    def _current_metadata(self, previous: Optional[ComicMetadata]) -> ComicMetadata:
        try:
            return self.fetcher.fetch_metadata()
        except FetchError as exc:
            if previous is None:
                raise
            logger.warning("Metadata fetch failed (%s); showing stored comic #%d", exc, previous.number)
            return previous

    def refresh(self) -> RefreshResult:
        with _RENDER_LOCK:
            previous = self.store.last_metadata()
            metadata = self._current_metadata(previous)

            image = self.store.load_image()
            fetched = False
            if image is None or previous is None or previous.number != metadata.number:
                image = self.fetcher.fetch_image(metadata.image_url)
                self.store.save_image(image)
                fetched = True
            else:
                logger.info("No new comic since #%d; reusing stored image", metadata.number)

            caption = Caption(metadata.title, metadata.number, metadata.alt_text)
            events = decode_png(iter_chunks(image, self.settings.chunk_size))
            try:
                frame = render_events(events, self.panel, caption, settings=self.settings)
            except DecodeError:
                logger.warning("Discarding undecodable image for comic #%d", metadata.number)
                self.store.discard_image()
                raise
            self.store.remember(metadata)

            self.refresh_count += 1
            logger.info("Completed %d refreshes", self.refresh_count)
            return RefreshResult(number=metadata.number, fetched_image=fetched, frame=frame)
