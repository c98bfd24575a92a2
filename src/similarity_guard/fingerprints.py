"""Winnowing fingerprints over k-gram rolling hashes.

Based on Schleimer, Wilkerson and Aiken, "Winnowing: Local Algorithms for
Document Fingerprinting" (SIGMOD 2003).
"""

from __future__ import annotations

from typing import List, Sequence, Set

from .models import Fingerprint
from .textutils import normalize_text

HASH_BASE = 257
HASH_MODULUS = 2_147_483_647

DEFAULT_K_GRAM_LENGTH = 5
DEFAULT_GUARANTEE_THRESHOLD = 9


def window_size_for(k: int, guarantee_threshold: int) -> int:
    """Number of consecutive k-gram hashes per winnowing window."""
    return max(1, guarantee_threshold - k + 1)


def kgram_hashes(text: str, k: int) -> List[int]:
    """Hash every k-character window of ``text`` with a rolling polynomial hash."""
    n = len(text)
    if k < 1 or n < k:
        return []

    high_order = pow(HASH_BASE, k - 1, HASH_MODULUS)
    value = 0
    for char in text[:k]:
        value = (value * HASH_BASE + ord(char)) % HASH_MODULUS
    hashes = [value]

    for idx in range(k, n):
        leaving = ord(text[idx - k])
        value = (value - (leaving * high_order) % HASH_MODULUS + HASH_MODULUS) % HASH_MODULUS
        value = (value * HASH_BASE + ord(text[idx])) % HASH_MODULUS
        hashes.append(value)
    return hashes


def kgram_hashes_naive(text: str, k: int) -> List[int]:
    """Hash every k-gram from scratch; reference for ``kgram_hashes``."""
    if k < 1 or len(text) < k:
        return []
    return [_polynomial_hash(text[i : i + k]) for i in range(len(text) - k + 1)]


def winnow(hashes: Sequence[int], window: int) -> Set[Fingerprint]:
    """Select the rightmost minimum of each window, skipping repeated picks.

    A sequence shorter than the window is treated as a single window.
    """
    if not hashes:
        return set()

    window = max(1, min(window, len(hashes)))
    fingerprints: Set[Fingerprint] = set()
    last_position = -1
    for start in range(len(hashes) - window + 1):
        min_position = start
        for idx in range(start, start + window):
            # <= keeps the latest occurrence on ties.
            if hashes[idx] <= hashes[min_position]:
                min_position = idx
        if min_position != last_position:
            fingerprints.add(Fingerprint(hashes[min_position], min_position))
            last_position = min_position
    return fingerprints


def fingerprint_text(
    text: str,
    k: int = DEFAULT_K_GRAM_LENGTH,
    guarantee_threshold: int = DEFAULT_GUARANTEE_THRESHOLD,
) -> Set[Fingerprint]:
    """Return the winnowing fingerprint set of ``text`` after normalization."""
    normalized = normalize_text(text)
    if not normalized:
        return set()
    if len(normalized) < k:
        return {Fingerprint(_polynomial_hash(normalized), 0)}
    return winnow(kgram_hashes(normalized, k), window_size_for(k, guarantee_threshold))


def _polynomial_hash(chunk: str) -> int:
    value = 0
    for char in chunk:
        value = (value * HASH_BASE + ord(char)) % HASH_MODULUS
    return value
