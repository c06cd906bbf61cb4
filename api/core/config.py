# core/config.py
import os

from dotenv import load_dotenv

# Load .env
load_dotenv()

# ---- SERVER ----
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ---- UPSTREAM (bible.com reader) ----
BIBLE_BASE_URL = os.getenv("BIBLE_BASE_URL", "https://www.bible.com")
VERSE_TIMEOUT_SECONDS = float(os.getenv("VERSE_TIMEOUT_SECONDS", "12"))
CHAPTER_TIMEOUT_SECONDS = float(os.getenv("CHAPTER_TIMEOUT_SECONDS", "12"))
UPSTREAM_HTTP_TIMEOUT = float(os.getenv("UPSTREAM_HTTP_TIMEOUT", "15"))

# ---- CORS ----
DEFAULT_ALLOWED_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS).split(",")
    if origin.strip()
]


def as_app_config() -> dict:
    """Return the environment-derived settings as Flask config keys."""
    return {
        "BIBLE_BASE_URL": BIBLE_BASE_URL,
        "VERSE_TIMEOUT_SECONDS": VERSE_TIMEOUT_SECONDS,
        "CHAPTER_TIMEOUT_SECONDS": CHAPTER_TIMEOUT_SECONDS,
        "UPSTREAM_HTTP_TIMEOUT": UPSTREAM_HTTP_TIMEOUT,
        "ALLOWED_ORIGINS": list(ALLOWED_ORIGINS),
    }
