# api/services/references/reference_parser.py
"""
Scripture reference parser.

Splits a free-text reference into book, chapter and optional verse range:
- "John 3:16"        -> John, 3, 16-16
- "Psalm 23:1-6"     -> Psalm, 23, 1-6
- "1 Corinthians 13" -> 1 Corinthians, 13 (whole chapter)

The book part is kept as typed; book_resolver turns it into a code.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .book_resolver import require_book


# <book> <chapter>[:<verse_start>[-<verse_end>]]
# The book is an optional leading digit followed by letters, spaces and periods.
REFERENCE_PATTERN = re.compile(
    r'^(\d?\s*[A-Za-z .]+)\s+(\d+)(?::(\d+)(?:-(\d+))?)?$',
    re.ASCII,
)


class ReferenceParseError(Exception):
    """Raised when a reference cannot be parsed."""
    pass


@dataclass
class ParsedReference:
    """
    A parsed scripture reference.

    Attributes:
        book: Book text as typed (e.g., "1 Cor.", "John")
        chapter: Chapter number
        verse_start: Starting verse (None for chapter-only references)
        verse_end: Ending verse (equals verse_start for a single verse)
    """
    book: str
    chapter: int
    verse_start: Optional[int] = None
    verse_end: Optional[int] = None

    @property
    def is_chapter(self) -> bool:
        """True if this is a chapter-only reference."""
        return self.verse_start is None


@dataclass
class ResolvedLookup:
    """A parsed reference whose book has been resolved to a canonical code."""
    book_code: str
    chapter: int
    verse_start: Optional[int] = None
    verse_end: Optional[int] = None

    @property
    def is_chapter(self) -> bool:
        return self.verse_start is None

    @property
    def chapter_ref(self) -> str:
        """Upstream chapter reference: JHN.3"""
        return f"{self.book_code}.{self.chapter}"

    @property
    def verse_ref(self) -> Optional[str]:
        """Upstream verse reference: JHN.3.16 (None for chapter lookups)"""
        if self.is_chapter:
            return None
        return f"{self.book_code}.{self.chapter}.{self.verse_start}"


def parse_reference(ref_string: str) -> ParsedReference:
    """
    Parse a scripture reference string.

    Args:
        ref_string: The reference string to parse

    Returns:
        ParsedReference

    Raises:
        ReferenceParseError: If the string is not a reference
    """
    text = (ref_string or "").strip()
    match = REFERENCE_PATTERN.match(text)
    if not match:
        raise ReferenceParseError(f"Not a scripture reference: {ref_string!r}")

    book, chapter, verse_start, verse_end = match.groups()
    chapter = int(chapter)
    verse_start = int(verse_start) if verse_start else None
    verse_end = int(verse_end) if verse_end else verse_start

    if chapter < 1:
        raise ReferenceParseError(f"Chapter must be 1 or greater: {ref_string!r}")
    if verse_start is not None:
        if verse_start < 1:
            raise ReferenceParseError(f"Verse must be 1 or greater: {ref_string!r}")
        if verse_end < verse_start:
            raise ReferenceParseError(f"Verse range ends before it starts: {ref_string!r}")

    return ParsedReference(
        book=book,
        chapter=chapter,
        verse_start=verse_start,
        verse_end=verse_end,
    )


def resolve_reference(parsed: ParsedReference) -> ResolvedLookup:
    """
    Resolve the book of a parsed reference.

    Raises:
        UnknownBookError: If the book name is not recognized
    """
    return ResolvedLookup(
        book_code=require_book(parsed.book),
        chapter=parsed.chapter,
        verse_start=parsed.verse_start,
        verse_end=parsed.verse_end,
    )


def is_valid_reference(ref_string: str) -> bool:
    """Check if a string parses as a scripture reference."""
    try:
        parse_reference(ref_string)
    except ReferenceParseError:
        return False
    return True
