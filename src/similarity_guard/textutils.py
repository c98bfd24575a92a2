from __future__ import annotations

import re

LINE_ENDING_RE = re.compile(r"\r\n|\r")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(value: str) -> str:
    """Canonicalize code text so every metric sees identical input.

    Line endings are unified, characters are lower-cased, whitespace runs
    (newlines included) collapse to one space and the ends are trimmed.
    """
    normalized = LINE_ENDING_RE.sub("\n", value)
    normalized = normalized.lower()
    normalized = WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()
