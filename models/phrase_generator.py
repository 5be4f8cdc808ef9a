"""
Phrase generation for n-gram typing drills.

Takes a ranked n-gram source (or a custom word list), keeps the top
``scope`` entries, shuffles them and groups them into practice phrases of
``combination`` n-grams repeated ``repetition`` times.

The shuffle is injected as a permuter so callers and tests can choose
a seeded or identity ordering.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

CUSTOM_WORDS_SOURCE = "custom_words"

Permuter = Callable[[List[str]], List[str]]


def fisher_yates_shuffle(items: List[str], rng: Optional[random.Random] = None) -> List[str]:
    """
    Shuffle ``items`` in place using the Fisher-Yates algorithm.

    Args:
        items: List to shuffle (modified in place)
        rng: Random source; the module-level ``random`` generator when None

    Returns:
        The same list, for chaining
    """
    randint = rng.randint if rng is not None else random.randint
    for i in range(len(items) - 1, 0, -1):
        j = randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def seeded_permuter(seed: Optional[int] = None) -> Permuter:
    """Return a permuter backed by its own ``random.Random(seed)``."""
    rng = random.Random(seed)

    def permute(items: List[str]) -> List[str]:
        return fisher_yates_shuffle(items, rng)

    return permute


def identity_permuter(items: List[str]) -> List[str]:
    """Permuter that keeps the ranked order."""
    return items


def generate_phrases(
    source: Optional[Sequence[str]],
    scope: Optional[int],
    combination: int = 2,
    repetition: int = 3,
    permute: Optional[Permuter] = None,
) -> List[str]:
    """
    Generate typing practice phrases from n-grams.

    Args:
        source: N-grams ordered by rank, most frequent first
        scope: Number of top-ranked n-grams to use; None (or anything that is
            not a positive integer) uses the whole source
        combination: Number of n-grams joined into each sub-phrase
        repetition: Number of times each sub-phrase is repeated
        permute: Permuter applied to the working copy; Fisher-Yates over the
            module ``random`` generator when None

    Returns:
        A new list with one phrase per group of ``combination`` n-grams. The
        last group may be shorter. ``source`` itself is never modified.
    """
    if not source:
        return []

    # Top of the ranking first, then shuffle within that slice
    if isinstance(scope, int) and not isinstance(scope, bool) and scope > 0:
        scoped = list(source[:scope])
    else:
        scoped = list(source)

    ngrams = (permute or fisher_yates_shuffle)(scoped)

    phrases: List[str] = []
    for start in range(0, len(ngrams), combination):
        sub_phrase = " ".join(ngrams[start : start + combination])
        phrases.append(" ".join([sub_phrase] * repetition))

    logger.debug(
        "Generated %d phrases from %d n-grams (combination=%d, repetition=%d)",
        len(phrases),
        len(ngrams),
        combination,
        repetition,
    )
    return phrases


def get_source(
    source_name: str,
    sources: Mapping[str, Sequence[str]],
    custom_words: Optional[Sequence[str]] = None,
) -> Sequence[str]:
    """
    Pick the n-gram source to feed the generator.

    Returns the custom words for :data:`CUSTOM_WORDS_SOURCE`, otherwise the
    named corpus; an empty list when either is missing.
    """
    if source_name == CUSTOM_WORDS_SOURCE:
        return custom_words or []
    return sources.get(source_name) or []
