"""
N-gram frequency analysis for free-form text.

Turns pasted text into frequency tables of words (n=1) and character
bigrams, trigrams and tetragrams (n=2..4), and ranks those tables by
frequency. Every function here is pure and never raises on odd input:
anything it cannot use degrades to an empty result.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

FrequencyTable = Dict[str, int]
RankedList = List[Tuple[str, int]]

# Anything that is not a letter, digit, underscore or whitespace
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


class NgramType(str, Enum):
    """Granularity of an n-gram table, keyed by its display name."""

    WORDS = "words"
    BIGRAMS = "bigrams"
    TRIGRAMS = "trigrams"
    TETRAGRAMS = "tetragrams"

    @property
    def size(self) -> int:
        return {
            NgramType.WORDS: 1,
            NgramType.BIGRAMS: 2,
            NgramType.TRIGRAMS: 3,
            NgramType.TETRAGRAMS: 4,
        }[self]


def clean_text(text: str) -> str:
    """Lower-case text, turn punctuation into spaces and collapse whitespace."""
    cleaned = _PUNCTUATION_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def extract_ngrams(text: Optional[str], n: int) -> FrequencyTable:
    """
    Count the n-grams of size ``n`` in ``text``.

    For ``n == 1`` the n-grams are whole words. For ``n > 1`` they are
    character windows taken after all whitespace has been removed, so
    windows run across word boundaries.

    Args:
        text: Input text, may be empty or None
        n: Size of the n-grams (1 for words, 2 for bigrams, ...)

    Returns:
        Mapping of n-gram to occurrence count. Empty when the text is empty,
        ``n < 1`` or the cleaned text is shorter than ``n``.
    """
    if not isinstance(text, str) or not text:
        return {}
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        return {}

    cleaned = clean_text(text)
    if len(cleaned) < n:
        return {}

    counts: Dict[str, int] = defaultdict(int)
    if n == 1:
        for word in cleaned.split(" "):
            if word:
                counts[word] += 1
    else:
        letters = _WHITESPACE_RE.sub("", cleaned)
        for i in range(len(letters) - n + 1):
            counts[letters[i : i + n]] += 1

    logger.debug("Extracted %d distinct %d-grams", len(counts), n)
    return dict(counts)


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _frequency_pairs(ngram_frequencies: object) -> List[Tuple[str, int]]:
    """Pull well-formed ``(ngram, count)`` pairs out of a table or ranked list."""
    if isinstance(ngram_frequencies, Mapping):
        items: Iterable[object] = ngram_frequencies.items()
    elif isinstance(ngram_frequencies, Iterable) and not isinstance(ngram_frequencies, (str, bytes)):
        items = ngram_frequencies
    else:
        return []

    pairs = []
    for item in items:
        if not isinstance(item, (tuple, list)) or len(item) != 2:
            continue
        ngram, freq = item
        if isinstance(ngram, str) and _is_count(freq):
            pairs.append((ngram, freq))
    return pairs


def sort_ngrams_by_frequency(
    ngram_frequencies: Union[Mapping[str, int], Iterable[Tuple[str, int]]],
    min_frequency: int = 1,
) -> RankedList:
    """
    Rank a frequency table, most frequent first.

    Accepts either a frequency mapping or an already ranked list of
    ``(ngram, frequency)`` pairs. Entries below ``min_frequency`` are
    dropped, as are entries whose count is not an integer. Anything that is
    neither a mapping nor a list of pairs ranks as empty. The sort is
    stable, so n-grams with equal counts keep the order in which they were
    found, and re-sorting a ranked list returns it unchanged.
    """
    if not _is_count(min_frequency):
        min_frequency = 1
    entries = [(ngram, freq) for ngram, freq in _frequency_pairs(ngram_frequencies) if freq >= min_frequency]
    return sorted(entries, key=lambda item: item[1], reverse=True)


def analyze_text(text: Optional[str]) -> Dict[str, FrequencyTable]:
    """Run :func:`extract_ngrams` for words, bigrams, trigrams and tetragrams."""
    return {ngram_type.value: extract_ngrams(text, ngram_type.size) for ngram_type in NgramType}


def get_top_ngrams(ngram_frequencies: Mapping[str, int], top_n: int = 50) -> List[str]:
    """Return just the strings of the ``top_n`` most frequent n-grams."""
    if not _is_count(top_n) or top_n < 1:
        return []
    return [ngram for ngram, _ in sort_ngrams_by_frequency(ngram_frequencies)[:top_n]]
