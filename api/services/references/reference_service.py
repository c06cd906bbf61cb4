# api/services/references/reference_service.py
"""
Verse and chapter retrieval with a verse -> chapter fallback.

The provider's single-verse pages are less reliable than its chapter pages,
so a failed or slow verse lookup is retried once as a chapter lookup and the
requested verses are sliced out locally. Every upstream call runs on its own
daemon thread under a bounded wait, so a hanging translation never delays
lookups for another one. A call that overruns is abandoned, not cancelled,
because the scraper has no way to stop an in-flight request.
"""

import logging
import threading
from typing import Any, Callable, Optional

from .reference_parser import ResolvedLookup
from .scraper_registry import ScraperRegistry
from .text_cleanup import one_line

logger = logging.getLogger(__name__)


class UpstreamTimeoutError(Exception):
    """Raised when an upstream call does not finish within its time budget."""
    pass


class UpstreamUnavailableError(Exception):
    """Raised when every retrieval attempt for a lookup has failed."""
    pass


def call_with_timeout(fn: Callable[[], Any], seconds: float, label: str = "operation"):
    """
    Run fn on a fresh daemon thread and wait at most `seconds` for its result.

    The clock starts when fn starts; there is no shared pool to queue behind.
    Exceptions raised by fn propagate unchanged. On expiry the thread is left
    to finish in the background and its result is discarded.

    Raises:
        UpstreamTimeoutError: If fn has not finished in time
    """
    outcome = {}

    def run():
        try:
            outcome["result"] = fn()
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=run, name=f"upstream-{label}", daemon=True)
    worker.start()
    worker.join(seconds)

    if worker.is_alive():
        raise UpstreamTimeoutError(f"{label} timeout after {seconds:g}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("result")


def verse_number(reference) -> Optional[int]:
    """Trailing verse number of a USFM reference: "JHN.3.16" -> 16."""
    try:
        return int(str(reference).split(".")[-1])
    except ValueError:
        return None


class ReferenceService:
    """
    Retrieval coordinator for resolved lookups.

    Usage:
        service = ReferenceService(ScraperRegistry())

        # Single verse or range (falls back to the chapter on failure)
        data = service.retrieve(lookup, translation_id=3202, label="John 3:16")

        # Whole chapter
        data = service.retrieve(chapter_lookup, translation_id=3202)
    """

    def __init__(
        self,
        registry: ScraperRegistry,
        verse_timeout: float = 12,
        chapter_timeout: float = 12,
    ):
        self.registry = registry
        self.verse_timeout = verse_timeout
        self.chapter_timeout = chapter_timeout

    def retrieve(
        self,
        lookup: ResolvedLookup,
        translation_id: int,
        label: Optional[str] = None,
    ) -> dict:
        """
        Fetch and normalize the text for a lookup.

        Args:
            lookup: Resolved book code, chapter and optional verse range
            translation_id: Provider translation id (e.g. 3202)
            label: Reference as the caller wrote it, echoed back when the
                   result is assembled from a chapter slice

        Returns:
            Verse dict, chapter dict, or {"content", "reference"} slice,
            with all content passed through one_line()

        Raises:
            UpstreamUnavailableError: If the provider could not be reached
        """
        scraper = self.registry.get(translation_id)

        if lookup.is_chapter:
            return self._fetch_chapter(scraper, lookup)
        return self._fetch_verses(scraper, lookup, label)

    def _fetch_verses(self, scraper, lookup: ResolvedLookup, label: Optional[str]) -> dict:
        try:
            verse = call_with_timeout(
                lambda: scraper.verse(lookup.verse_ref),
                self.verse_timeout,
                "verse fetch",
            )
            return {**verse, "content": one_line(verse.get("content"))}
        except Exception as e:
            logger.warning(f"verse() failed for {lookup.verse_ref}, falling back to chapter(): {e}")

        try:
            chapter = call_with_timeout(
                lambda: scraper.chapter(lookup.chapter_ref),
                self.chapter_timeout,
                "chapter fetch",
            )
            content = self.slice_verses(chapter, lookup.verse_start, lookup.verse_end)
        except Exception as e:
            logger.error(f"chapter() fallback failed for {lookup.chapter_ref}: {e}")
            raise UpstreamUnavailableError(str(e))

        return {
            "content": content,
            "reference": label if label is not None else lookup.verse_ref,
        }

    def _fetch_chapter(self, scraper, lookup: ResolvedLookup) -> dict:
        try:
            chapter = call_with_timeout(
                lambda: scraper.chapter(lookup.chapter_ref),
                self.chapter_timeout,
                "chapter fetch",
            )
            verses = chapter.get("verses") or []
            return {
                **chapter,
                "verses": [{**v, "content": one_line(v.get("content"))} for v in verses],
            }
        except Exception as e:
            logger.error(f"chapter() fetch failed for {lookup.chapter_ref}: {e}")
            raise UpstreamUnavailableError(str(e))

    @staticmethod
    def slice_verses(chapter: dict, start: int, end: int) -> str:
        """Join the normalized content of verses start..end (inclusive)."""
        selected = []
        for v in chapter.get("verses") or []:
            n = verse_number(v.get("reference"))
            if n is not None and start <= n <= end:
                selected.append(one_line(v.get("content")))
        return one_line(" ".join(selected))

