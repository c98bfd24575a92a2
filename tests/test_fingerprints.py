import random

from similarity_guard.fingerprints import (
    fingerprint_text,
    kgram_hashes,
    kgram_hashes_naive,
    window_size_for,
    winnow,
)
from similarity_guard.models import Fingerprint

ALPHABET = "abcdefghij ;{}()=+_0123éλ"


def test_rolling_hash_matches_naive_hashing():
    rng = random.Random(1234)
    for length in range(0, 80, 3):
        text = "".join(rng.choice(ALPHABET) for _ in range(length))
        for k in (1, 3, 5, 8):
            rolling = kgram_hashes(text, k)
            naive = kgram_hashes_naive(text, k)
            assert rolling == naive
            assert len(rolling) == max(0, length - k + 1)
            window = window_size_for(k, 9)
            assert winnow(rolling, window) == winnow(naive, window)


def test_kgram_hashes_empty_when_text_shorter_than_k():
    assert kgram_hashes("abcd", 5) == []
    assert kgram_hashes("", 1) == []


def test_window_size_is_clamped_to_one():
    assert window_size_for(5, 9) == 5
    assert window_size_for(9, 9) == 1
    assert window_size_for(12, 9) == 1


def test_winnow_prefers_rightmost_minimum():
    assert winnow([3, 1, 1, 2], 4) == {Fingerprint(1, 2)}
    assert winnow([3, 1, 1, 2], 2) == {Fingerprint(1, 1), Fingerprint(1, 2)}


def test_winnow_records_each_position_once():
    hashes = [5, 1, 7, 8, 9, 6]
    # The minimum at index 1 wins the first two windows, then 7 and 6 take over.
    assert winnow(hashes, 3) == {
        Fingerprint(1, 1),
        Fingerprint(7, 2),
        Fingerprint(6, 5),
    }


def test_winnow_treats_short_sequence_as_single_window():
    assert winnow([5, 4], 5) == {Fingerprint(4, 1)}
    assert winnow([], 5) == set()


def test_same_hash_at_different_positions_counts_twice():
    fingerprints = winnow([2, 9, 9, 2, 9, 9], 3)
    assert Fingerprint(2, 0) in fingerprints
    assert Fingerprint(2, 3) in fingerprints


def test_fingerprint_text_handles_degenerate_inputs():
    assert fingerprint_text("") == set()
    assert fingerprint_text("   \n\t") == set()
    assert len(fingerprint_text("x")) == 1
    assert fingerprint_text("Hello World") == fingerprint_text("hello   world")
