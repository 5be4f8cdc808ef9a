"""Tests for SessionRecord, TotalStats and the stats summary."""
import pytest
from pydantic import ValidationError

from models.practice_history import SessionRecord, TotalStats, summary


def make_record(cpm: int = 240, accuracy: int = 100, chars: int = 20, duration: float = 5.0) -> SessionRecord:
    return SessionRecord(
        source="bigrams",
        lesson="1/25",
        cpm=cpm,
        accuracy=accuracy,
        characters_typed=chars,
        duration=duration,
    )


class TestSessionRecord:
    def test_timestamp_defaults_to_now(self) -> None:
        record = make_record()
        assert record.timestamp.tzinfo is not None

    def test_accuracy_bounds(self) -> None:
        with pytest.raises(ValidationError):
            make_record(accuracy=120)


class TestTotalStats:
    def test_record_accumulates(self) -> None:
        stats = TotalStats().record(make_record(cpm=240), True).record(make_record(cpm=300), True)
        assert stats.total_sessions == 2
        assert stats.lessons_completed == 2
        assert stats.total_characters == 40
        assert stats.total_time == pytest.approx(10.0)
        assert stats.best_cpm == 300
        assert stats.current_streak == 2
        assert stats.longest_streak == 2

    def test_missed_threshold_breaks_streak(self) -> None:
        stats = TotalStats()
        for met in (True, True, True, False, True):
            stats = stats.record(make_record(), met)
        assert stats.current_streak == 1
        assert stats.longest_streak == 3

    def test_reset_streak_keeps_totals(self) -> None:
        stats = TotalStats().record(make_record(), True)
        reset = stats.reset_streak()
        assert reset.current_streak == 0
        assert reset.longest_streak == 1
        assert reset.total_sessions == 1
        assert stats.current_streak == 1

    def test_stats_are_immutable(self) -> None:
        with pytest.raises(ValidationError):
            TotalStats().best_cpm = 10


class TestSummary:
    def test_summary_averages(self) -> None:
        history = [make_record(cpm=200, accuracy=100), make_record(cpm=251, accuracy=95)]
        stats = TotalStats()
        for record in history:
            stats = stats.record(record, True)
        result = summary(stats, history)
        assert result["average_cpm"] == 226
        assert result["average_accuracy"] == 98
        assert result["best_cpm"] == 251
        assert result["total_sessions"] == 2

    def test_summary_of_empty_history(self) -> None:
        result = summary(TotalStats(), [])
        assert result["average_cpm"] == 0
        assert result["average_accuracy"] == 0
