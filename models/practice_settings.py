"""Practice configuration records.

Pydantic models holding the scope/combination/repetition parameters per
source and the thresholds a phrase must meet before the drill advances.
Records are immutable from the caller's point of view: changes produce new
records, and the generator receives the values explicitly on every call.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.exceptions import InvalidConfigurationError, UnknownSourceError
from models.ngram_analyzer import NgramType
from models.phrase_generator import CUSTOM_WORDS_SOURCE

SCOPE_OPTIONS: Tuple[int, ...] = (50, 100, 150, 200)
DEFAULT_SCOPE = 50
DEFAULT_COMBINATION = 2
DEFAULT_REPETITION = 3
DEFAULT_MINIMUM_CPM = 200
DEFAULT_MINIMUM_ACCURACY = 100

BUILTIN_SOURCES: Tuple[str, ...] = tuple(
    t.value for t in (NgramType.BIGRAMS, NgramType.TRIGRAMS, NgramType.TETRAGRAMS, NgramType.WORDS)
)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "settings"
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


class GeneratorParameters(BaseModel):
    """Parameters for one phrase generation pass.

    Attributes:
        scope: Number of top-ranked n-grams to draw from, or None for all
        combination: N-grams per sub-phrase (>= 1)
        repetition: Sub-phrase repeats per phrase (>= 1)
    """

    scope: Optional[int] = DEFAULT_SCOPE
    combination: int = Field(default=DEFAULT_COMBINATION, ge=1)
    repetition: int = Field(default=DEFAULT_REPETITION, ge=1)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
    }

    @field_validator("scope")
    @classmethod
    def validate_scope(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v not in SCOPE_OPTIONS:
            options = ", ".join(str(s) for s in SCOPE_OPTIONS)
            raise ValueError(f"scope must be one of {options} or null")
        return v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GeneratorParameters":
        """Build parameters from a plain mapping.

        Raises:
            InvalidConfigurationError: If any value is out of range
        """
        try:
            return cls(**dict(data))
        except ValidationError as exc:
            raise InvalidConfigurationError(_format_validation_error(exc)) from exc

    def as_kwargs(self) -> Dict[str, Any]:
        return {"scope": self.scope, "combination": self.combination, "repetition": self.repetition}


class SourceSettings(GeneratorParameters):
    """Generator parameters plus the thresholds used for one source."""

    minimum_cpm: int = Field(default=DEFAULT_MINIMUM_CPM, ge=0)
    minimum_accuracy: int = Field(default=DEFAULT_MINIMUM_ACCURACY, ge=0, le=100)

    def parameters(self) -> GeneratorParameters:
        return GeneratorParameters(**self.as_kwargs())


def _default_sources() -> Dict[str, SourceSettings]:
    sources = {name: SourceSettings() for name in BUILTIN_SOURCES}
    # Custom words have no ranking, so they are never truncated
    sources[CUSTOM_WORDS_SOURCE] = SourceSettings(scope=None)
    return sources


class PracticeSettings(BaseModel):
    """Settings for every practice source plus global drill options."""

    sources: Dict[str, SourceSettings] = Field(default_factory=_default_sources)
    practice_mode: bool = False

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
    }

    @field_validator("sources")
    @classmethod
    def fill_missing_sources(cls, v: Dict[str, SourceSettings]) -> Dict[str, SourceSettings]:
        merged = _default_sources()
        merged.update(v)
        return merged

    @classmethod
    def default(cls) -> "PracticeSettings":
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PracticeSettings":
        """Load settings from a mapping such as a parsed JSON document.

        Raises:
            InvalidConfigurationError: On unknown keys or out-of-range values
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise InvalidConfigurationError(_format_validation_error(exc)) from exc

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "PracticeSettings":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise InvalidConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Settings file {path} must contain a JSON object")
        return cls.from_mapping(data)

    def for_source(self, source_name: str) -> SourceSettings:
        try:
            return self.sources[source_name]
        except KeyError as exc:
            raise UnknownSourceError(f"Unknown practice source: {source_name}") from exc

    def with_source(self, source_name: str, **changes: Any) -> "PracticeSettings":
        """Return new settings with ``changes`` applied to one source.

        Raises:
            UnknownSourceError: If the source is not configured
            InvalidConfigurationError: If the changed values are invalid
        """
        current = self.for_source(source_name)
        try:
            updated = SourceSettings(**{**current.model_dump(), **changes})
        except ValidationError as exc:
            raise InvalidConfigurationError(_format_validation_error(exc)) from exc
        sources = dict(self.sources)
        sources[source_name] = updated
        return PracticeSettings(sources=sources, practice_mode=self.practice_mode)
