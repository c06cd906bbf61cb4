# api/services/references/scraper_registry.py
"""
Per-translation scraper cache.

One BibleScraper per translation id, created on first use and kept for the
life of the process. Translation ids are bounded by the provider's catalog,
so entries are never evicted.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

import requests

from .bible_scraper import BibleScraper

logger = logging.getLogger(__name__)


class ScraperRegistry:
    """
    Thread-safe get-or-create mapping of translation id -> scraper.

    Usage:
        registry = ScraperRegistry(base_url="https://www.bible.com")
        scraper = registry.get(3202)
        assert registry.get(3202) is scraper
    """

    def __init__(
        self,
        base_url: str = "https://www.bible.com",
        http_timeout: float = 15,
        factory: Optional[Callable[[int], Any]] = None,
    ):
        self.base_url = base_url
        self.http_timeout = http_timeout
        self._factory = factory or self._default_factory
        self._scrapers: Dict[int, Any] = {}
        self._lock = threading.Lock()
        self._session = None

    def _default_factory(self, translation_id: int) -> BibleScraper:
        # Scrapers share one connection pool
        if self._session is None:
            self._session = requests.Session()
        return BibleScraper(
            translation_id,
            base_url=self.base_url,
            timeout=self.http_timeout,
            session=self._session,
        )

    def get(self, translation_id: int):
        """Return the scraper for a translation, creating it on first use."""
        with self._lock:
            scraper = self._scrapers.get(translation_id)
            if scraper is None:
                logger.info(f"Creating scraper for translation {translation_id}")
                scraper = self._factory(translation_id)
                self._scrapers[translation_id] = scraper
            return scraper

    def __len__(self) -> int:
        with self._lock:
            return len(self._scrapers)

    def __contains__(self, translation_id) -> bool:
        with self._lock:
            return translation_id in self._scrapers
