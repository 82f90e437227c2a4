from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from .config import configure_logging
from .errors import FetchError, RenderError
from .infrastructure.responses import send_framebuffer, send_png
from .service import ComicService

APP_VERSION = "1.0.0"


def create_app(service: ComicService | None = None) -> Flask:
    logger = configure_logging()
    service = service or ComicService()
    app = Flask(__name__)
    app.config["COMIC_SERVICE"] = service

    @app.route("/framebuffer")
    def framebuffer():
        frame = service.panel.last_frame()
        if frame is None:
            return ("No frame rendered yet", 404)
        return send_framebuffer(frame)

    @app.route("/preview.png")
    def preview():
        frame = service.panel.last_frame()
        if frame is None:
            return ("No frame rendered yet", 404)
        return send_png(frame)

    @app.route("/refresh", methods=["POST"])
    def refresh():
        try:
            result = service.refresh()
        except (FetchError, RenderError) as exc:
            logger.error("Refresh failed: %s", exc)
            return jsonify(ok=False, error=str(exc)), 502
        return jsonify(
            ok=True,
            number=result.number,
            fetched_image=result.fetched_image,
            bytes=len(result.frame.data),
        )

    @app.route("/health")
    def health():
        return jsonify(
            ok=True,
            version=APP_VERSION,
            panel=f"{service.settings.panel_width}x{service.settings.panel_height}",
            refreshes=service.refresh_count,
            has_frame=service.panel.last_frame() is not None,
        )

    @app.route("/settings")
    def settings_view():
        return jsonify(asdict(service.settings))

    return app


# Module-level application for WSGI servers importing ``eink_comic.app:app``.
app = create_app()
application = app
