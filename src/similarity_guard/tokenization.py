from __future__ import annotations

import re
from collections import Counter
from typing import List

from .textutils import normalize_text

TOKEN_PATTERN = re.compile(r"[a-z0-9_]+")


def tokenize(text: str) -> List[str]:
    """Split text into identifier-like tokens, preserving order."""
    return TOKEN_PATTERN.findall(normalize_text(text))


def token_counts(text: str) -> Counter[str]:
    """Return the token multiset of ``text``."""
    return Counter(tokenize(text))
