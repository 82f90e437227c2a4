from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import requests

from ..config import SETTINGS, PanelSettings
from ..errors import FetchError, MetadataError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


@dataclass(frozen=True)
class ComicMetadata:
    number: int
    title: str
    alt_text: str
    image_url: str

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "ComicMetadata":
        try:
            return cls(
                number=int(payload["num"]),
                title=str(payload["safe_title"]),
                alt_text=str(payload["alt"]),
                image_url=str(payload["img"]),
            )
        except KeyError as exc:
            raise MetadataError(f"Metadata is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise MetadataError(f"Malformed metadata: {exc}") from exc


class ComicFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        settings: PanelSettings = SETTINGS,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._settings = settings
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "eink-comic/1.0"})
        return session

    def _get(self, url: str) -> requests.Response:
        last_exception: Exception | None = None
        for attempt in range(1, self._settings.retries + 2):
            try:
                response = self._session.get(url, timeout=self._settings.timeout)
                response.raise_for_status()
                return response
            except requests.RequestException as exc:
                logger.warning("Fetch of %s failed (attempt %d): %s", url, attempt, exc)
                last_exception = exc
                time.sleep(0.4 * attempt)
        raise FetchError(f"Could not fetch {url}: {last_exception}")

    def fetch_metadata(self, url: str | None = None) -> ComicMetadata:
        response = self._get(url or self._settings.metadata_url)
        try:
            payload = response.json()
        except ValueError as exc:
            raise MetadataError(f"Metadata is not valid JSON: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise MetadataError("Metadata document is not an object")
        metadata = ComicMetadata.from_json(payload)
        logger.info("Latest comic is #%d: %s", metadata.number, metadata.title)
        return metadata

    def fetch_image(self, url: str) -> bytes:
        response = self._get(url)
        logger.info("Fetched %d image bytes from %s", len(response.content), url)
        return response.content
