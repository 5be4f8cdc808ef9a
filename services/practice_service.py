"""
PracticeService: host workflow around the phrase generator and n-gram analyzer.

Handles source selection (built-in corpora or custom words), phrase rounds,
phrase completion scoring and the paste-text-to-phrases generator workflow.
The generator and analyzer stay stateless; this service owns the settings
and passes them explicitly on every call.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from models.corpus import CorpusProvider
from models.exceptions import EmptyInputError, PracticeError, UnknownSourceError
from models.ngram_analyzer import (
    FrequencyTable,
    NgramType,
    analyze_text,
    sort_ngrams_by_frequency,
)
from models.phrase_generator import (
    CUSTOM_WORDS_SOURCE,
    Permuter,
    generate_phrases,
    get_source,
)
from models.practice_history import SessionRecord, TotalStats, summary
from models.practice_settings import GeneratorParameters, PracticeSettings
from models.typing_metrics import (
    calculate_accuracy,
    calculate_cpm,
    count_correct_chars,
    meets_threshold,
)

logger = logging.getLogger(__name__)


class PracticeRound(BaseModel):
    """One generated set of phrases and the position reached in it."""

    source: str
    phrases: List[str] = Field(default_factory=list)
    current_index: int = 0
    cpms: List[int] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def current_phrase(self) -> str:
        if self.is_exhausted:
            return ""
        return self.phrases[self.current_index]

    @property
    def is_exhausted(self) -> bool:
        return self.current_index >= len(self.phrases)

    @property
    def lesson(self) -> str:
        return f"{self.current_index + 1}/{len(self.phrases)}"

    def advance(self, cpm: int) -> "PracticeRound":
        """Return the round moved to the next phrase with ``cpm`` recorded."""
        # The first phrase of a round starts a fresh CPM list
        cpms = [] if self.current_index == 0 else list(self.cpms)
        cpms.append(cpm)
        return self.model_copy(update={"current_index": self.current_index + 1, "cpms": cpms})


class PhraseOutcome(BaseModel):
    """Result of completing one phrase."""

    advanced: bool
    met_threshold: bool
    cpm: int
    accuracy: int
    record: Optional[SessionRecord] = None
    stats: TotalStats
    round: PracticeRound


class TextAnalysis(BaseModel):
    """Frequency tables for pasted text plus a top-N preview of each."""

    tables: Dict[str, FrequencyTable]
    top: Dict[str, List[Tuple[str, int]]]

    def ranked(self, granularity: str) -> List[Tuple[str, int]]:
        return sort_ngrams_by_frequency(self.tables.get(granularity, {}))


class PracticeService:
    """
    Coordinates corpora, settings and the phrase generator for a drill.

    Args:
        corpus_provider: Source of the built-in corpora
        settings: Practice settings; defaults when None
        permuter: Shuffle used by the generator; Fisher-Yates when None
    """

    def __init__(
        self,
        corpus_provider: Optional[CorpusProvider] = None,
        settings: Optional[PracticeSettings] = None,
        permuter: Optional[Permuter] = None,
    ) -> None:
        self.corpus_provider = corpus_provider or CorpusProvider()
        self.settings = settings or PracticeSettings.default()
        self.permuter = permuter
        self.custom_words: Optional[List[str]] = None
        self.rounds: Dict[str, PracticeRound] = {}
        self.history: List[SessionRecord] = []
        self.stats = TotalStats()

    def source_names(self) -> List[str]:
        return [*self.corpus_provider.names(), CUSTOM_WORDS_SOURCE]

    def _check_source(self, source_name: str) -> None:
        if source_name not in self.source_names():
            raise UnknownSourceError(f"Unknown practice source: {source_name}")

    def set_custom_words(self, text: str) -> List[str]:
        """Store whitespace-separated custom words as the custom source.

        Raises:
            EmptyInputError: If the text holds no words
        """
        words = (text or "").split()
        if not words:
            raise EmptyInputError("Please enter some words")
        self.custom_words = words
        logger.info("Stored %d custom words", len(words))
        return list(words)

    def update_settings(self, source_name: str, **changes: object) -> PracticeSettings:
        self.settings = self.settings.with_source(source_name, **changes)
        return self.settings

    def source_for(self, source_name: str) -> Sequence[str]:
        self._check_source(source_name)
        return get_source(source_name, self.corpus_provider.sources(), self.custom_words)

    def generate(
        self, source_name: str, parameters: Optional[GeneratorParameters] = None
    ) -> PracticeRound:
        """Generate a fresh round of phrases for a source.

        Args:
            source_name: Built-in corpus name or ``custom_words``
            parameters: Explicit parameters; the stored settings when None

        Raises:
            UnknownSourceError: If the source name is not known
        """
        params = parameters or self.settings.for_source(source_name).parameters()
        source = self.source_for(source_name)
        if not source:
            logger.warning("Source %s is empty, no phrases generated", source_name)
        phrases = generate_phrases(source, permute=self.permuter, **params.as_kwargs())
        logger.info("Generated %d phrases for %s", len(phrases), source_name)
        return PracticeRound(source=source_name, phrases=phrases)

    def start_round(
        self, source_name: str, parameters: Optional[GeneratorParameters] = None
    ) -> PracticeRound:
        """Generate a round and make it the current round for its source."""
        practice_round = self.generate(source_name, parameters)
        self.rounds[source_name] = practice_round
        return practice_round

    def current_round(self, source_name: str) -> PracticeRound:
        """The round in progress for a source, started on first use."""
        practice_round = self.rounds.get(source_name)
        if practice_round is None or practice_round.is_exhausted:
            practice_round = self.start_round(source_name)
        return practice_round

    def next_round(self, practice_round: PracticeRound) -> PracticeRound:
        """Replace an exhausted round with a newly generated one."""
        if not practice_round.is_exhausted:
            return practice_round
        fresh = self.generate(practice_round.source)
        return fresh.model_copy(update={"cpms": list(practice_round.cpms)})

    def complete_phrase(
        self,
        practice_round: PracticeRound,
        typed: str,
        seconds: float,
        stats: TotalStats,
    ) -> PhraseOutcome:
        """Score a completed phrase and move the round on when it qualifies.

        A phrase counts as completed only when the typed text matches it,
        ignoring surrounding whitespace. In practice mode the round always
        advances; otherwise the phrase must meet the source's minimum CPM
        and accuracy. A miss resets the streak and leaves the round on the
        same phrase.

        Raises:
            PracticeError: If the round has no current phrase or the typed
                text does not match it
        """
        if practice_round.is_exhausted:
            raise PracticeError("No phrase left in this round")

        expected = practice_round.current_phrase
        typed = (typed or "").strip()
        if typed != expected:
            raise PracticeError("Typed text does not match the current phrase")
        total_chars = len(typed)
        cpm = calculate_cpm(total_chars, seconds)
        accuracy = calculate_accuracy(count_correct_chars(expected, typed), total_chars)

        source_settings = self.settings.for_source(practice_round.source)
        met = meets_threshold(
            cpm, accuracy, source_settings.minimum_cpm, source_settings.minimum_accuracy
        )
        if not (met or self.settings.practice_mode):
            logger.debug("Phrase below threshold (cpm=%d, accuracy=%d)", cpm, accuracy)
            return PhraseOutcome(
                advanced=False,
                met_threshold=False,
                cpm=cpm,
                accuracy=accuracy,
                stats=stats.reset_streak(),
                round=practice_round,
            )

        record = SessionRecord(
            source=practice_round.source,
            lesson=practice_round.lesson,
            cpm=cpm,
            accuracy=accuracy,
            characters_typed=total_chars,
            duration=seconds,
        )
        return PhraseOutcome(
            advanced=True,
            met_threshold=met,
            cpm=cpm,
            accuracy=accuracy,
            record=record,
            stats=stats.record(record, met),
            round=self.next_round(practice_round.advance(cpm)),
        )

    def submit_phrase(self, source_name: str, typed: str, seconds: float) -> PhraseOutcome:
        """Complete the current phrase of a source against the service's own totals.

        Keeps the advanced round, the running stats and the session history.

        Raises:
            UnknownSourceError: If the source name is not known
            PracticeError: If the source has no phrases or the typed text
                does not match the current phrase
        """
        self._check_source(source_name)
        outcome = self.complete_phrase(self.current_round(source_name), typed, seconds, self.stats)
        self.rounds[source_name] = outcome.round
        self.stats = outcome.stats
        if outcome.record is not None:
            self.history.append(outcome.record)
            logger.info(
                "Completed %s lesson %s at %d CPM", source_name, outcome.record.lesson, outcome.cpm
            )
        return outcome

    def stats_summary(self) -> Dict[str, Any]:
        return summary(self.stats, self.history)

    def analyze(self, text: str, top_n: int = 20) -> TextAnalysis:
        """Analyze pasted text into word and character n-gram tables.

        Raises:
            EmptyInputError: If the text is blank
        """
        if not text or not text.strip():
            raise EmptyInputError("Please enter some text")
        tables = analyze_text(text)
        top = {name: sort_ngrams_by_frequency(table)[: max(top_n, 0)] for name, table in tables.items()}
        logger.info("Analyzed %d characters of text", len(text))
        return TextAnalysis(tables=tables, top=top)

    def phrases_from_analysis(
        self,
        analysis: TextAnalysis,
        granularity: str,
        parameters: Optional[GeneratorParameters] = None,
    ) -> List[str]:
        """Turn one granularity of an analysis into practice phrases."""
        try:
            ngram_type = NgramType(granularity)
        except ValueError as exc:
            raise UnknownSourceError(f"Unknown n-gram type: {granularity}") from exc
        params = parameters or GeneratorParameters()
        ranked = [ngram for ngram, _ in analysis.ranked(ngram_type.value)]
        return generate_phrases(ranked, permute=self.permuter, **params.as_kwargs())
