"""Service initialization module.

Factory helpers to create and wire services with their dependencies.
"""

from __future__ import annotations

from typing import Optional

from models.corpus import CorpusProvider
from models.practice_settings import PracticeSettings
from services.practice_service import PracticeService


def init_services(
    corpus_dir: Optional[str] = None, settings: Optional[PracticeSettings] = None
) -> PracticeService:
    """Initialize and return the practice service.

    Example:
        service = init_services()
    """
    return PracticeService(CorpusProvider(corpus_dir), settings=settings)
