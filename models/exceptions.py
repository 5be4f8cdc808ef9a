"""
Custom exceptions for the n-gram drill application.
"""


class PracticeError(Exception):
    """Base class for all practice-related exceptions."""


class InvalidConfigurationError(PracticeError, ValueError):
    """Raised when scope, combination, repetition or threshold settings are invalid."""


class UnknownSourceError(PracticeError, KeyError):
    """Raised when settings or a corpus are requested for an unknown source name."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable in logs and API responses
        return str(self.args[0]) if self.args else ""


class CorpusLoadError(PracticeError):
    """Raised when a corpus data file is missing or malformed."""


class EmptyInputError(PracticeError, ValueError):
    """Raised when the workflow receives blank custom words or blank text."""
