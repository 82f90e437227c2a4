import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PanelSettings:
    metadata_url: str
    port: int
    panel_width: int
    panel_height: int
    max_text_columns: int
    timeout: float
    retries: int
    chunk_size: int
    state_dir: str
    log_level: str

    @classmethod
    def from_env(cls) -> "PanelSettings":
        return cls(
            metadata_url=os.getenv("METADATA_URL", "https://xkcd.com/info.0.json"),
            port=int(os.getenv("PORT", "5500")),
            panel_width=int(os.getenv("PANEL_WIDTH", "800")),
            panel_height=int(os.getenv("PANEL_HEIGHT", "480")),
            max_text_columns=int(os.getenv("MAX_TEXT_COLUMNS", "80")),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            chunk_size=int(os.getenv("CHUNK_SIZE", "1024")),
            state_dir=os.getenv("STATE_DIR", "state"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


SETTINGS = PanelSettings.from_env()


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("eink-comic")
