# api/services/references/book_resolver.py
"""
Book name resolution.

Maps whatever a user typed for a book ("Gen.", "1 cor", "I Corinthians",
"songs", "1CO") to the canonical 3-letter code used by the scripture
provider (e.g. "GEN", "1CO", "SNG").
"""

import re
from typing import Optional


# Book name mapping - names and aliases to canonical codes
# Keys are lowercase without periods. Order matters: prefix lookups
# return the first key that matches.
BOOK_ALIASES = {
    # Torah/Pentateuch
    "genesis": "GEN",
    "exodus": "EXO",
    "leviticus": "LEV",
    "numbers": "NUM",
    "deuteronomy": "DEU",

    # Historical Books
    "joshua": "JOS",
    "judges": "JDG",
    "ruth": "RUT",
    "1 samuel": "1SA",
    "2 samuel": "2SA",
    "i samuel": "1SA",
    "ii samuel": "2SA",
    "1 kings": "1KI",
    "2 kings": "2KI",
    "i kings": "1KI",
    "ii kings": "2KI",
    "1 chronicles": "1CH",
    "2 chronicles": "2CH",
    "i chronicles": "1CH",
    "ii chronicles": "2CH",
    "ezra": "EZR",
    "nehemiah": "NEH",
    "esther": "EST",

    # Wisdom/Poetry
    "job": "JOB",
    "psalms": "PSA",
    "psalm": "PSA",
    "ps": "PSA",
    "proverbs": "PRO",
    "prov": "PRO",
    "ecclesiastes": "ECC",
    "qoheleth": "ECC",
    "eccles": "ECC",
    "song of songs": "SNG",
    "song of solomon": "SNG",
    "canticles": "SNG",
    "songs": "SNG",

    # Major Prophets
    "isaiah": "ISA",
    "jeremiah": "JER",
    "lamentations": "LAM",
    "lam": "LAM",
    "ezekiel": "EZK",
    "ezechiel": "EZK",
    "daniel": "DAN",

    # Minor Prophets
    "hosea": "HOS",
    "joel": "JOL",
    "amos": "AMO",
    "obadiah": "OBA",
    "jonah": "JON",
    "micah": "MIC",
    "nahum": "NAM",
    "habakkuk": "HAB",
    "zephaniah": "ZEP",
    "haggai": "HAG",
    "zechariah": "ZEC",
    "malachi": "MAL",

    # New Testament - Gospels and Acts
    "matthew": "MAT",
    "mark": "MRK",
    "luke": "LUK",
    "john": "JHN",
    "acts": "ACT",

    # Pauline Epistles
    "romans": "ROM",
    "1 corinthians": "1CO",
    "2 corinthians": "2CO",
    "i corinthians": "1CO",
    "ii corinthians": "2CO",
    "galatians": "GAL",
    "ephesians": "EPH",
    "philippians": "PHP",
    "colossians": "COL",
    "1 thessalonians": "1TH",
    "2 thessalonians": "2TH",
    "i thessalonians": "1TH",
    "ii thessalonians": "2TH",
    "1 timothy": "1TI",
    "2 timothy": "2TI",
    "i timothy": "1TI",
    "ii timothy": "2TI",
    "titus": "TIT",
    "philemon": "PHM",

    # General Epistles
    "hebrews": "HEB",
    "james": "JAS",
    "1 peter": "1PE",
    "2 peter": "2PE",
    "i peter": "1PE",
    "ii peter": "2PE",
    "1 john": "1JN",
    "2 john": "2JN",
    "3 john": "3JN",
    "i john": "1JN",
    "ii john": "2JN",
    "iii john": "3JN",
    "jude": "JUD",

    # Revelation
    "revelation": "REV",
    "revelations": "REV",
    "apocalypse": "REV",
}

# The 66 canonical codes
BOOK_CODES = frozenset(BOOK_ALIASES.values())


class UnknownBookError(Exception):
    """Raised when a book name cannot be resolved to a code."""

    def __init__(self, raw_book: str):
        self.raw_book = raw_book
        super().__init__(f"Unknown book '{raw_book}'")


def normalize_book_key(name: str) -> str:
    """Lowercase, drop periods and collapse whitespace: " 1  Cor. " -> "1 cor"."""
    key = str(name).replace(".", "")
    key = re.sub(r"\s+", " ", key).strip()
    return key.lower()


def resolve_book(raw: str) -> Optional[str]:
    """
    Resolve a book name, alias, abbreviation or code to its canonical code.

    Lookup order:
    1. The input is itself a code once spaces are dropped ("1 co" -> "1CO")
    2. Exact alias match ("i corinthians" -> "1CO")
    3. First alias, in table order, that starts with the input
       ("1 cor" -> "1 corinthians" -> "1CO")

    Args:
        raw: Book text as typed by the user

    Returns:
        Canonical 3-letter code, or None if nothing matches
    """
    key = normalize_book_key(raw)
    if not key:
        return None

    maybe_code = key.replace(" ", "").upper()
    if maybe_code in BOOK_CODES:
        return maybe_code

    if key in BOOK_ALIASES:
        return BOOK_ALIASES[key]

    for alias, code in BOOK_ALIASES.items():
        if alias.startswith(key):
            return code

    return None


def require_book(raw: str) -> str:
    """Like resolve_book(), but raises UnknownBookError instead of returning None."""
    code = resolve_book(raw)
    if code is None:
        raise UnknownBookError(raw)
    return code
