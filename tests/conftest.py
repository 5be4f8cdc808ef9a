"""Pytest configuration for the test suite."""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, Generator, List

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from models.corpus import CorpusProvider
from models.phrase_generator import identity_permuter
from models.practice_settings import PracticeSettings
from services.practice_service import PracticeService

SAMPLE_CORPORA: Dict[str, List[str]] = {
    "bigrams": ["th", "he", "in", "er", "an", "re", "on", "at", "en", "nd"],
    "trigrams": ["the", "and", "ing", "ion", "tio", "ent"],
    "tetragrams": ["tion", "atio", "that", "ther"],
    "words": ["the", "be", "to", "of", "and", "a", "in"],
}


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """Write small ranked corpora to a temporary directory."""
    directory = tmp_path / "corpora"
    directory.mkdir()
    for name, entries in SAMPLE_CORPORA.items():
        (directory / f"{name}.json").write_text(json.dumps(entries), encoding="utf-8")
    return directory


@pytest.fixture
def corpus_provider(corpus_dir: Path) -> CorpusProvider:
    return CorpusProvider(corpus_dir)


@pytest.fixture
def practice_service(corpus_provider: CorpusProvider) -> PracticeService:
    """Service with sample corpora and an identity shuffle for predictable phrases."""
    return PracticeService(
        corpus_provider=corpus_provider,
        settings=PracticeSettings.default(),
        permuter=identity_permuter,
    )


@pytest.fixture(autouse=True)
def _isolate_root_logger() -> Generator[None, None, None]:
    """Drop handlers added by configure_logging so they do not outlive captured streams."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
