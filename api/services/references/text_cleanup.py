# api/services/references/text_cleanup.py
"""
Text normalization for scripture content.

Provider text arrives with "<<"/">>" quote markers, asterisks around
translator additions, stray line breaks and invisible characters. one_line()
turns it into a single clean line.
"""

import re

ZERO_WIDTH = re.compile(r'[\u200B-\u200D\uFEFF]')
OPEN_QUOTE = re.compile(r'<<\s*')
CLOSE_QUOTE = re.compile(r'\s*>>')
LINE_BREAKS = re.compile(r'[\r\n\u000B\u000C\u0085\u2028\u2029]+')
MULTI_SPACE = re.compile(r'\s{2,}')


def clean_punct(text) -> str:
    """Drop zero-width characters and asterisks, then convert quote markers."""
    text = ZERO_WIDTH.sub("", "" if text is None else str(text))
    text = text.replace("*", "")
    text = OPEN_QUOTE.sub("\u201C", text)
    return CLOSE_QUOTE.sub("\u201D", text)


def one_line(text) -> str:
    """
    Normalize provider text to a single trimmed line.

    Idempotent: one_line(one_line(s)) == one_line(s).

    Example:
        one_line("<<Hello>>  world\\n\\n*bold*") -> "“Hello” world bold"
    """
    text = clean_punct(text)
    text = LINE_BREAKS.sub(" ", text)
    text = text.replace("\u00A0", " ")
    text = MULTI_SPACE.sub(" ", text)
    return text.strip()
