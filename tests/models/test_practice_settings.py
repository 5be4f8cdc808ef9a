"""Model-focused tests for GeneratorParameters, SourceSettings and PracticeSettings.

Covers:
- defaults per source (custom words are never truncated)
- validation of scope, combination, repetition and thresholds
- loading from mappings and JSON files
- copy-on-change updates
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from models.exceptions import InvalidConfigurationError, UnknownSourceError
from models.practice_settings import (
    BUILTIN_SOURCES,
    SCOPE_OPTIONS,
    GeneratorParameters,
    PracticeSettings,
    SourceSettings,
)


class TestGeneratorParameters:
    def test_defaults(self) -> None:
        params = GeneratorParameters()
        assert params.as_kwargs() == {"scope": 50, "combination": 2, "repetition": 3}

    @pytest.mark.parametrize("scope", [None, *SCOPE_OPTIONS])
    def test_recognized_scopes(self, scope) -> None:
        assert GeneratorParameters(scope=scope).scope == scope

    @pytest.mark.parametrize("scope", [0, 10, 75, 250, -50])
    def test_unrecognized_scope_rejected(self, scope: int) -> None:
        with pytest.raises(ValueError):
            GeneratorParameters(scope=scope)

    @pytest.mark.parametrize("field", ["combination", "repetition"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_counts_rejected(self, field: str, value: int) -> None:
        with pytest.raises(InvalidConfigurationError, match=field):
            GeneratorParameters.from_mapping({field: value})

    def test_from_mapping_rejects_unknown_keys(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            GeneratorParameters.from_mapping({"scope": 50, "length": 3})

    def test_invalid_configuration_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            GeneratorParameters.from_mapping({"combination": 0})

    def test_assignment_is_validated(self) -> None:
        params = GeneratorParameters()
        with pytest.raises(ValueError):
            params.repetition = 0


class TestSourceSettings:
    def test_thresholds_default(self) -> None:
        settings = SourceSettings()
        assert settings.minimum_cpm == 200
        assert settings.minimum_accuracy == 100

    def test_accuracy_bounds(self) -> None:
        with pytest.raises(ValueError):
            SourceSettings(minimum_accuracy=101)
        with pytest.raises(ValueError):
            SourceSettings(minimum_cpm=-1)

    def test_parameters_drop_thresholds(self) -> None:
        params = SourceSettings(scope=100, combination=3, repetition=1).parameters()
        assert type(params) is GeneratorParameters
        assert params.as_kwargs() == {"scope": 100, "combination": 3, "repetition": 1}


class TestPracticeSettings:
    def test_default_has_every_source(self) -> None:
        settings = PracticeSettings.default()
        assert set(settings.sources) == {*BUILTIN_SOURCES, "custom_words"}
        for name in BUILTIN_SOURCES:
            assert settings.for_source(name).scope == 50
        assert settings.for_source("custom_words").scope is None
        assert settings.practice_mode is False

    def test_for_unknown_source(self) -> None:
        with pytest.raises(UnknownSourceError, match="pentagrams"):
            PracticeSettings.default().for_source("pentagrams")

    def test_with_source_returns_new_settings(self) -> None:
        original = PracticeSettings.default()
        updated = original.with_source("trigrams", scope=150, combination=4)
        assert updated.for_source("trigrams").scope == 150
        assert updated.for_source("trigrams").combination == 4
        assert original.for_source("trigrams").scope == 50

    def test_with_source_rejects_invalid_values(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            PracticeSettings.default().with_source("bigrams", repetition=0)

    def test_from_mapping_merges_defaults(self) -> None:
        settings = PracticeSettings.from_mapping(
            {"sources": {"words": {"scope": 200, "combination": 1}}, "practice_mode": True}
        )
        assert settings.practice_mode is True
        assert settings.for_source("words").scope == 200
        assert settings.for_source("bigrams").scope == 50
        assert settings.for_source("custom_words").scope is None

    def test_from_mapping_rejects_bad_values(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="combination"):
            PracticeSettings.from_mapping({"sources": {"words": {"combination": 0}}})

    def test_from_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"sources": {"bigrams": {"scope": 100}}}), encoding="utf-8")
        assert PracticeSettings.from_json_file(path).for_source("bigrams").scope == 100

    def test_from_json_file_errors(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidConfigurationError):
            PracticeSettings.from_json_file(tmp_path / "missing.json")
        bad = tmp_path / "bad.json"
        bad.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(InvalidConfigurationError, match="JSON object"):
            PracticeSettings.from_json_file(bad)
