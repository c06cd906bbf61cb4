# routes/verse_api.py
"""
API endpoint for scripture verse and chapter lookup.

GET /api/verse?ref=John%203:16&ver=3202
"""

import logging

from flask import Blueprint, current_app, request

from services.references import (
    ReferenceParseError,
    ReferenceService,
    UnknownBookError,
    UpstreamUnavailableError,
    parse_reference,
    resolve_reference,
)
from utils.errors import bad_request, ok_response, server_error, upstream_timeout

logger = logging.getLogger(__name__)

verse_bp = Blueprint("verse_api", __name__, url_prefix="/api")

BAD_REFERENCE_MESSAGE = "Bad reference. Try 'John 3:16'."
MISSING_PARAMS_MESSAGE = "Missing ref or ver"


def get_service() -> ReferenceService:
    """ReferenceService owned by the running app (see server.create_app)."""
    return current_app.extensions["reference_service"]


def _translation_id(raw) -> int:
    """Parse ver ("3202", "3202.0"); 0, blanks, fractions and non-numbers count as missing."""
    text = str(raw).strip()
    if not text.isascii():
        return 0
    try:
        value = float(text)
    except ValueError:
        return 0
    if not value.is_integer() or value <= 0:
        return 0
    return int(value)


@verse_bp.get("/verse")
def get_verse():
    """
    Look up a verse, verse range or chapter.

    Query params:
        ref: Reference string (required) e.g., "John 3:16", "Psalm 23:1-6", "Genesis 1"
        ver: Numeric translation id (required) e.g., 3202

    Returns:
        {"ok": true, "data": {...}}

        data is the verse ({"reference", "content", ...}), the chapter
        ({"reference", "verses": [...], ...}), or, when the verse page
        failed and the chapter was used instead, {"content", "reference"}.
    """
    try:
        ref = (request.args.get("ref") or "").strip()
        ver = _translation_id(request.args.get("ver"))
        if not ref or not ver:
            return bad_request(MISSING_PARAMS_MESSAGE)

        try:
            parsed = parse_reference(ref)
        except ReferenceParseError:
            return bad_request(BAD_REFERENCE_MESSAGE)

        try:
            lookup = resolve_reference(parsed)
        except UnknownBookError as e:
            return bad_request(str(e))

        try:
            data = get_service().retrieve(lookup, ver, label=ref)
        except UpstreamUnavailableError:
            return upstream_timeout()

        return ok_response(data)

    except Exception as e:
        logger.exception(f"handler error: {e}")
        return server_error(str(e))
