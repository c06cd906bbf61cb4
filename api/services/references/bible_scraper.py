# api/services/references/bible_scraper.py
"""
bible.com reader client.

Fetches verses and chapters for one translation from the public bible.com
reader pages. Each page embeds its data as Next.js JSON in a
<script id="__NEXT_DATA__"> tag; verses come straight from that JSON and
chapters from the chapter HTML it carries.

References use USFM form:
    chapter: "JHN.3"
    verse:   "JHN.3.16"
"""

import json
import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "VerseFetch/1.0 (+scripture lookup)",
    "Accept": "text/html,application/xhtml+xml",
}


class ScraperError(Exception):
    """Base exception for upstream scraper errors."""
    pass


class ScraperNetworkError(ScraperError):
    """Raised when the upstream request fails or returns an error status."""
    pass


class BibleScraper:
    """
    Client for one bible.com translation.

    Usage:
        scraper = BibleScraper(3202)

        verse = scraper.verse("JHN.3.16")
        print(verse["content"])

        chapter = scraper.chapter("PSA.23")
        for v in chapter["verses"]:
            print(v["reference"], v["content"])
    """

    def __init__(
        self,
        translation_id: int,
        base_url: str = "https://www.bible.com",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.translation_id = translation_id
        self.base_url = base_url.rstrip("/")
        self._request_timeout = timeout
        self.session = session or requests.Session()

    def _page_url(self, ref: str) -> str:
        return f"{self.base_url}/bible/{self.translation_id}/{ref}"

    def _fetch_page_props(self, ref: str) -> dict:
        """
        Download a reader page and return its Next.js pageProps.

        Raises:
            ScraperNetworkError: On transport failure or non-2xx status
            ScraperError: If the page carries no usable data
        """
        url = self._page_url(ref)

        try:
            logger.debug(f"Fetching {url}")
            response = self.session.get(url, headers=HEADERS, timeout=self._request_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ScraperNetworkError(f"Request for {ref} failed: {e}")

        soup = BeautifulSoup(response.text, "html.parser")
        script = soup.find("script", id="__NEXT_DATA__")
        if script is None or not script.string:
            raise ScraperError(f"No page data found for {ref}")

        try:
            data = json.loads(script.string)
        except json.JSONDecodeError as e:
            raise ScraperError(f"Malformed page data for {ref}: {e}")

        props = data.get("props", {}).get("pageProps")
        if not isinstance(props, dict):
            raise ScraperError(f"Malformed page data for {ref}: missing pageProps")
        return props

    def verse(self, ref: str) -> dict:
        """
        Get a single verse.

        Args:
            ref: USFM verse reference, e.g. "JHN.3.16"

        Returns:
            {
                "reference": "JHN.3.16",
                "human": "John 3:16",
                "content": "For God so loved the world...",
                "version": 3202,
            }
        """
        props = self._fetch_page_props(ref)
        verses = props.get("verses") or []
        if not verses:
            raise ScraperError(f"Verse not found: {ref}")

        first = verses[0]
        reference = first.get("reference") or {}
        usfm = reference.get("usfm") or [ref]

        return {
            "reference": usfm[0],
            "human": reference.get("human", ""),
            "content": first.get("content", ""),
            "version": self.translation_id,
        }

    def chapter(self, ref: str) -> dict:
        """
        Get a whole chapter.

        Args:
            ref: USFM chapter reference, e.g. "PSA.23"

        Returns:
            {
                "reference": "PSA.23",
                "human": "Psalms 23",
                "version": 3202,
                "verses": [
                    {"reference": "PSA.23.1", "content": "The LORD is my shepherd..."},
                    ...
                ],
            }
        """
        props = self._fetch_page_props(ref)
        info = props.get("chapterInfo")
        if not isinstance(info, dict) or not info.get("content"):
            raise ScraperError(f"Chapter not found: {ref}")

        reference = info.get("reference") or {}
        return {
            "reference": reference.get("usfm", ref),
            "human": reference.get("human", ""),
            "version": self.translation_id,
            "verses": parse_chapter_html(info["content"]),
        }


def _has_class(tag, fragment: str) -> bool:
    """bible.com class names carry build hashes (ChapterContent_verse__57FIw)."""
    return any(fragment in cls for cls in (tag.get("class") or []))


def parse_chapter_html(html: str) -> list[dict]:
    """
    Extract verses from bible.com chapter HTML.

    A verse can be split over several spans sharing one data-usfm value
    (poetry lines, paragraph breaks); the pieces are joined in page order.
    Verse numbers, footnotes and cross-reference notes are skipped.

    Returns:
        List of {"reference": "JHN.3.16", "content": "..."} in chapter order
    """
    soup = BeautifulSoup(html, "html.parser")

    for extra in soup.find_all(lambda tag: _has_class(tag, "note") or _has_class(tag, "label")):
        extra.decompose()

    pieces: dict[str, list[str]] = {}
    for span in soup.find_all("span", attrs={"data-usfm": True}):
        usfm = span["data-usfm"].split("+")[0]
        content_spans = span.find_all(lambda tag: _has_class(tag, "content"))
        if content_spans:
            text = " ".join(c.get_text() for c in content_spans)
        else:
            text = span.get_text()
        pieces.setdefault(usfm, []).append(text)

    return [
        {"reference": usfm, "content": " ".join(parts)}
        for usfm, parts in pieces.items()
    ]
