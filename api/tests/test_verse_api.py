# api/tests/test_verse_api.py
"""
End-to-end tests for GET /api/verse and the status endpoints.

Drives the Flask app through its test client with fake scrapers injected
via SCRAPER_FACTORY; no network access needed.

Run with: python tests/test_verse_api.py
"""

import os
import sys
import threading

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from server import create_app
from services.references import ScraperError


CHAPTER = {
    "reference": "JHN.3",
    "human": "John 3",
    "verses": [
        {"reference": "JHN.3.16", "content": "For God so loved\nthe world"},
        {"reference": "JHN.3.17", "content": "*For* God did not send"},
    ],
}


class HealthyScraper:
    def __init__(self):
        self.calls = []

    def verse(self, ref):
        self.calls.append(("verse", ref))
        return {"reference": ref, "human": "John 3:16", "content": "<<For God>>  so loved\n"}

    def chapter(self, ref):
        self.calls.append(("chapter", ref))
        return CHAPTER


class BrokenVerseScraper(HealthyScraper):
    def verse(self, ref):
        self.calls.append(("verse", ref))
        raise ScraperError("verse page broken")


class HangingScraper:
    def __init__(self):
        self.release = threading.Event()

    def verse(self, ref):
        self.release.wait(5)

    def chapter(self, ref):
        self.release.wait(5)


def make_client(scraper, timeout=2.0, **overrides):
    seen = []

    def factory(translation_id):
        seen.append(translation_id)
        return scraper

    config = {
        "TESTING": True,
        "SCRAPER_FACTORY": factory,
        "VERSE_TIMEOUT_SECONDS": timeout,
        "CHAPTER_TIMEOUT_SECONDS": timeout,
        "ALLOWED_ORIGINS": ["https://verses.example"],
    }
    config.update(overrides)
    app = create_app(config)
    return app, app.test_client(), seen


def test_missing_params():
    print("\n=== Testing missing parameters ===")

    _, client, _ = make_client(HealthyScraper())
    for query in ["", "?ver=3202", "?ref=John%203:16", "?ref=%20%20&ver=3202",
                  "?ref=John%203:16&ver=abc", "?ref=John%203:16&ver=0",
                  "?ref=John%203:16&ver=3202.5", "?ref=John%203:16&ver=nan",
                  "?ref=John%203:16&ver=-3"]:
        res = client.get(f"/api/verse{query}")
        assert res.status_code == 400, f"{query}: {res.status_code}"
        assert res.get_json() == {"ok": False, "error": "Missing ref or ver"}
    print("✓ 400 Missing ref or ver")


def test_bad_reference_and_unknown_book():
    print("\n=== Testing client input errors ===")

    _, client, _ = make_client(HealthyScraper())

    res = client.get("/api/verse?ref=not%20a%20reference&ver=3202")
    assert res.status_code == 400
    assert res.get_json() == {"ok": False, "error": "Bad reference. Try 'John 3:16'."}
    print("✓ 400 Bad reference")

    res = client.get("/api/verse?ref=Hezekiah%201:1&ver=3202")
    assert res.status_code == 400
    assert res.get_json() == {"ok": False, "error": "Unknown book 'Hezekiah'"}
    print("✓ 400 Unknown book")


def test_healthy_verse():
    print("\n=== Testing healthy verse lookup ===")

    scraper = HealthyScraper()
    _, client, seen = make_client(scraper)

    res = client.get("/api/verse?ref=John%203:16&ver=3202")
    assert res.status_code == 200
    body = res.get_json()
    assert body["ok"] is True
    assert body["data"]["content"] == "“For God” so loved"
    assert body["data"]["reference"] == "JHN.3.16"
    assert scraper.calls == [("verse", "JHN.3.16")]
    assert seen == [3202]
    print("✓ 200 with normalized single-verse content")

    res = client.get("/api/verse?ref=john%203:17&ver=3202")
    assert res.status_code == 200
    assert seen == [3202], "scraper should be reused for the same translation"
    print("✓ Scraper reused per translation")

    res = client.get("/api/verse?ref=John%203:16&ver=3202.0")
    assert res.status_code == 200
    assert seen == [3202], "integral float ver names the same translation"
    print("✓ ver=3202.0 accepted as 3202")


def test_verse_fallback():
    print("\n=== Testing verse -> chapter fallback ===")

    scraper = BrokenVerseScraper()
    _, client, _ = make_client(scraper)

    res = client.get("/api/verse?ref=John%203:16-17&ver=3202")
    assert res.status_code == 200
    assert res.get_json() == {
        "ok": True,
        "data": {
            "content": "For God so loved the world For God did not send",
            "reference": "John 3:16-17",
        },
    }
    assert scraper.calls == [("verse", "JHN.3.16"), ("chapter", "JHN.3")]
    print("✓ 200 assembled from the chapter's verse slice")


def test_chapter_lookup():
    print("\n=== Testing chapter lookup ===")

    _, client, _ = make_client(HealthyScraper())

    res = client.get("/api/verse?ref=John%203&ver=3202")
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["reference"] == "JHN.3"
    assert [v["content"] for v in data["verses"]] == [
        "For God so loved the world",
        "For God did not send",
    ]
    print("✓ 200 with normalized chapter")


def test_upstream_timeout():
    print("\n=== Testing upstream timeout ===")

    scraper = HangingScraper()
    _, client, _ = make_client(scraper, timeout=0.05)
    try:
        res = client.get("/api/verse?ref=John%203:16&ver=3202")
        assert res.status_code == 504
        assert res.get_json() == {"ok": False, "error": "Upstream timeout. Please try again."}
        print("✓ 504 when verse and chapter both time out")

        res = client.get("/api/verse?ref=John%203&ver=3202")
        assert res.status_code == 504
        print("✓ 504 when chapter lookup times out")
    finally:
        scraper.release.set()


def test_unexpected_error():
    print("\n=== Testing unexpected errors ===")

    def exploding_factory(translation_id):
        raise RuntimeError("registry exploded")

    _, client, _ = make_client(None, SCRAPER_FACTORY=exploding_factory)
    res = client.get("/api/verse?ref=John%203:16&ver=3202")
    assert res.status_code == 500
    assert res.get_json() == {"ok": False, "error": "registry exploded"}
    print("✓ 500 with the raw error message")


def test_origins():
    print("\n=== Testing cross-origin policy ===")

    _, client, _ = make_client(HealthyScraper())

    res = client.get("/api/verse?ref=John%203:16&ver=3202")
    assert res.status_code == 200
    assert "Access-Control-Allow-Origin" not in res.headers
    print("✓ No Origin header -> allowed")

    res = client.get("/api/verse?ref=John%203:16&ver=3202",
                     headers={"Origin": "https://verses.example"})
    assert res.status_code == 200
    assert res.headers["Access-Control-Allow-Origin"] == "https://verses.example"
    print("✓ Listed origin -> allowed with CORS headers")

    res = client.get("/api/verse?ref=John%203:16&ver=3202",
                     headers={"Origin": "https://evil.example"})
    assert res.status_code == 403
    assert res.get_json() == {"ok": False, "error": "Origin not allowed"}
    print("✓ Unlisted origin -> 403")


def test_status_endpoints():
    print("\n=== Testing status endpoints ===")

    _, client, _ = make_client(HealthyScraper(), BIBLE_BASE_URL="https://example.test")

    res = client.get("/status")
    assert res.status_code == 200
    assert res.get_json()["status"] == "ok"
    print("✓ /status")

    client.get("/api/verse?ref=John%203:16&ver=3202")
    res = client.get("/health")
    assert res.status_code == 200
    body = res.get_json()
    assert body["components"]["upstream"]["base_url"] == "https://example.test"
    assert body["components"]["scrapers"]["cached"] == 1
    print("✓ /health reports upstream config and cache size")

    res = client.get("/")
    assert res.status_code == 200
    assert b"Verse Lookup" in res.data
    print("✓ / serves the lookup page")


def main():
    """Run all tests."""
    print("=" * 60)
    print("Verse API Test Suite")
    print("=" * 60)

    test_missing_params()
    test_bad_reference_and_unknown_book()
    test_healthy_verse()
    test_verse_fallback()
    test_chapter_lookup()
    test_upstream_timeout()
    test_unexpected_error()
    test_origins()
    test_status_endpoints()

    print("\n" + "=" * 60)
    print("ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
