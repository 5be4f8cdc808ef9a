"""
Models package for the n-gram drill.

This package contains the n-gram analyzer, the phrase generator and the
data models around them.
"""

# Import key modules to make them available at the package level
from models.ngram_analyzer import analyze_text, extract_ngrams, sort_ngrams_by_frequency
from models.phrase_generator import generate_phrases, get_source

__all__ = [
    "analyze_text",
    "extract_ngrams",
    "sort_ngrams_by_frequency",
    "generate_phrases",
    "get_source",
]
