from flask import Blueprint, current_app, jsonify
from datetime import datetime, timezone

status_bp = Blueprint("status_api", __name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@status_bp.get("/status")
def status():
    """Basic liveness check."""
    return jsonify({"status": "ok", "time_utc": _utc_now()})


@status_bp.get("/health")
def health():
    """
    Health check endpoint.

    Reports the upstream configuration and how many translation scrapers
    are cached. Does not call the upstream provider.
    """
    service = current_app.extensions["reference_service"]

    response = {
        "status": "healthy",
        "time_utc": _utc_now(),
        "components": {
            "upstream": {
                "base_url": service.registry.base_url,
                "verse_timeout": service.verse_timeout,
                "chapter_timeout": service.chapter_timeout,
            },
            "scrapers": {"cached": len(service.registry)},
        },
    }

    return jsonify(response), 200
