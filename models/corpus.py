"""
Built-in ranked n-gram corpora.

Each corpus is a JSON list of strings ordered by descending frequency
(rank 1 first) stored under ``models/corpora``. The provider validates and
caches them as tuples, so loaded sources cannot be changed by callers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from models.exceptions import CorpusLoadError, UnknownSourceError
from models.practice_settings import BUILTIN_SOURCES

logger = logging.getLogger(__name__)

CORPORA_DIR = Path(__file__).resolve().parent / "corpora"

NgramSource = Tuple[str, ...]


class CorpusProvider:
    """
    Loads the four built-in corpora (bigrams, trigrams, tetragrams, words).

    Corpora are read lazily on first use and kept for the life of the
    provider.
    """

    def __init__(self, directory: Optional[Union[str, Path]] = None) -> None:
        """
        Args:
            directory: Folder holding ``<name>.json`` files; the packaged
                corpora when None
        """
        self.directory = Path(directory) if directory is not None else CORPORA_DIR
        self._cache: Dict[str, NgramSource] = {}

    @staticmethod
    def names() -> Tuple[str, ...]:
        return BUILTIN_SOURCES

    def load(self, name: str) -> NgramSource:
        """
        Load one corpus by name.

        Raises:
            UnknownSourceError: If ``name`` is not a built-in corpus
            CorpusLoadError: If the file is missing or malformed
        """
        if name not in BUILTIN_SOURCES:
            raise UnknownSourceError(f"Unknown corpus: {name}")
        if name not in self._cache:
            self._cache[name] = self._read(self.directory / f"{name}.json")
            logger.debug("Loaded corpus %s with %d entries", name, len(self._cache[name]))
        return self._cache[name]

    def sources(self) -> Dict[str, NgramSource]:
        """All built-in corpora keyed by name, in display order."""
        return {name: self.load(name) for name in BUILTIN_SOURCES}

    @staticmethod
    def _read(path: Path) -> NgramSource:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise CorpusLoadError(f"Corpus file not found: {path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise CorpusLoadError(f"Cannot read corpus file {path}: {exc}") from exc

        if not isinstance(data, list):
            raise CorpusLoadError(f"Corpus file {path} must contain a JSON list")

        seen = set()
        for rank, entry in enumerate(data, start=1):
            if not isinstance(entry, str) or not entry.strip():
                raise CorpusLoadError(f"{path.name}: entry {rank} must be a non-empty string")
            if entry != entry.strip() or len(entry.split()) != 1:
                raise CorpusLoadError(f"{path.name}: entry {rank} must not contain whitespace")
            if entry in seen:
                raise CorpusLoadError(f"{path.name}: duplicate entry '{entry}' at rank {rank}")
            seen.add(entry)
        return tuple(data)
