# api/services/references/__init__.py
"""
Scripture lookup services.

This package provides:
- ReferenceService: Verse/chapter retrieval with chapter fallback
- ScraperRegistry: Per-translation scraper cache
- BibleScraper: bible.com reader client
- ParsedReference / ResolvedLookup: Structured scripture references
- parse_reference: Parse human-readable references
- resolve_book: Book name/alias/code -> canonical code
- one_line: Provider text normalization
"""

from .book_resolver import (
    BOOK_ALIASES,
    BOOK_CODES,
    UnknownBookError,
    normalize_book_key,
    resolve_book,
    require_book,
)
from .reference_parser import (
    ParsedReference,
    ResolvedLookup,
    ReferenceParseError,
    parse_reference,
    resolve_reference,
    is_valid_reference,
)
from .text_cleanup import clean_punct, one_line
from .bible_scraper import (
    BibleScraper,
    ScraperError,
    ScraperNetworkError,
    parse_chapter_html,
)
from .scraper_registry import ScraperRegistry
from .reference_service import (
    ReferenceService,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
    call_with_timeout,
)

__all__ = [
    # Retrieval (primary interface)
    "ReferenceService",
    "UpstreamTimeoutError",
    "UpstreamUnavailableError",
    "call_with_timeout",
    # Upstream
    "ScraperRegistry",
    "BibleScraper",
    "ScraperError",
    "ScraperNetworkError",
    "parse_chapter_html",
    # Reference parsing
    "ParsedReference",
    "ResolvedLookup",
    "ReferenceParseError",
    "parse_reference",
    "resolve_reference",
    "is_valid_reference",
    # Book names
    "BOOK_ALIASES",
    "BOOK_CODES",
    "UnknownBookError",
    "normalize_book_key",
    "resolve_book",
    "require_book",
    # Text
    "clean_punct",
    "one_line",
]
