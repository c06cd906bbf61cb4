import logging
import os
import sys

from flask import Flask, request, send_from_directory
from flask_cors import CORS

from core import config
from routes.status_api import status_bp
from routes.verse_api import verse_bp
from services.references import ReferenceService, ScraperRegistry
from utils.errors import forbidden

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PUBLIC_DIR = os.path.join(os.path.dirname(BASE_DIR), "public")


def create_app(overrides: dict = None) -> Flask:
    """
    Build the Flask app.

    Args:
        overrides: Config values replacing the environment defaults. Tests
                   pass short timeouts and a SCRAPER_FACTORY here.
    """
    app = Flask(__name__, static_folder=PUBLIC_DIR, static_url_path="")
    app.config.update(config.as_app_config())
    app.config["SCRAPER_FACTORY"] = None
    if overrides:
        app.config.update(overrides)

    app.json.sort_keys = False

    # Browsers may only call the API from listed origins
    allowed_origins = app.config["ALLOWED_ORIGINS"]
    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    registry = ScraperRegistry(
        base_url=app.config["BIBLE_BASE_URL"],
        http_timeout=app.config["UPSTREAM_HTTP_TIMEOUT"],
        factory=app.config["SCRAPER_FACTORY"],
    )
    app.extensions["reference_service"] = ReferenceService(
        registry,
        verse_timeout=app.config["VERSE_TIMEOUT_SECONDS"],
        chapter_timeout=app.config["CHAPTER_TIMEOUT_SECONDS"],
    )

    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.full_path.rstrip('?')}")

    @app.before_request
    def check_origin():
        # No Origin header: curl, server-to-server
        origin = request.headers.get("Origin")
        if origin and request.path.startswith("/api/") and origin not in allowed_origins:
            logger.warning(f"Rejected request from origin {origin}")
            return forbidden("Origin not allowed")

    @app.get("/")
    def index():
        return send_from_directory(PUBLIC_DIR, "index.html")

    app.register_blueprint(status_bp)
    app.register_blueprint(verse_bp)

    return app


app = create_app()

if __name__ == "__main__":
    logger.info(f"Server running at http://{config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT)
