import io
from dataclasses import replace

import pytest
from PIL import Image

from eink_comic.app import create_app
from eink_comic.config import SETTINGS
from eink_comic.errors import FetchError
from eink_comic.infrastructure.network import ComicMetadata
from eink_comic.infrastructure.panel import MemoryPanel
from eink_comic.infrastructure.store import ComicStore
from eink_comic.service import ComicService


class StubFetcher:
    offline = False

    def fetch_metadata(self):
        if self.offline:
            raise FetchError("offline")
        return ComicMetadata(9, "Title", "Alt", "http://x/9.png")

    def fetch_image(self, url):
        buffer = io.BytesIO()
        Image.new("RGB", (8, 8), (0, 0, 0)).save(buffer, "PNG")
        return buffer.getvalue()


@pytest.fixture
def fetcher():
    return StubFetcher()


@pytest.fixture
def client(tmp_path, fetcher):
    settings = replace(SETTINGS, panel_width=40, panel_height=30, state_dir=str(tmp_path))
    service = ComicService(fetcher, ComicStore(tmp_path), MemoryPanel(), settings)
    return create_app(service).test_client()


def test_framebuffer_is_missing_before_first_refresh(client):
    assert client.get("/framebuffer").status_code == 404
    assert client.get("/preview.png").status_code == 404


def test_refresh_then_serve_framebuffer(client):
    response = client.post("/refresh")
    assert response.status_code == 200
    assert response.get_json()["number"] == 9

    framebuffer = client.get("/framebuffer")
    assert framebuffer.status_code == 200
    assert framebuffer.mimetype == "application/octet-stream"
    assert framebuffer.headers["X-Panel-Width"] == "40"
    assert framebuffer.headers["X-Panel-Height"] == "30"
    assert framebuffer.headers["X-Panel-Stride"] == "5"
    assert len(framebuffer.data) == 5 * 30

    preview = client.get("/preview.png")
    assert preview.mimetype == "image/png"
    assert Image.open(io.BytesIO(preview.data)).size == (40, 30)


def test_refresh_failure_reports_bad_gateway(client, fetcher):
    fetcher.offline = True

    response = client.post("/refresh")

    assert response.status_code == 502
    assert response.get_json()["ok"] is False


def test_health_and_settings(client):
    health = client.get("/health").get_json()
    assert health["ok"] is True
    assert health["panel"] == "40x30"
    assert health["has_frame"] is False

    settings = client.get("/settings").get_json()
    assert settings["panel_width"] == 40
