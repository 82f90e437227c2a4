from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from .network import ComicMetadata

logger = logging.getLogger(__name__)

METADATA_FILE = "last_comic.json"
IMAGE_FILE = "comic.png"


class ComicStore:
    """Remembers the last rendered comic's metadata and image bytes on disk."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    @property
    def metadata_path(self) -> Path:
        return self.directory / METADATA_FILE

    @property
    def image_path(self) -> Path:
        return self.directory / IMAGE_FILE

    def last_metadata(self) -> Optional[ComicMetadata]:
        try:
            raw = self.metadata_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            payload = json.loads(raw)
            return ComicMetadata(
                number=int(payload["number"]),
                title=str(payload["title"]),
                alt_text=str(payload["alt_text"]),
                image_url=str(payload["image_url"]),
            )
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring corrupt comic state in %s: %s", self.metadata_path, exc)
            return None

    def last_number(self) -> Optional[int]:
        metadata = self.last_metadata()
        return metadata.number if metadata else None

    def remember(self, metadata: ComicMetadata) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.metadata_path.write_text(json.dumps(asdict(metadata)), encoding="utf-8")

    def save_image(self, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.image_path.write_bytes(data)

    def discard_image(self) -> None:
        self.image_path.unlink(missing_ok=True)

    def load_image(self) -> Optional[bytes]:
        try:
            return self.image_path.read_bytes()
        except FileNotFoundError:
            return None
