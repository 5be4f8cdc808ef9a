"""Practice history models.

Pydantic models for a completed phrase (SessionRecord) and the running
totals across all practice (TotalStats), including the threshold streak.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Sequence

from pydantic import BaseModel, Field

from models.typing_metrics import calculate_average_cpm, round_half_up


class SessionRecord(BaseModel):
    """One completed practice phrase."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str
    lesson: str
    cpm: int = Field(ge=0)
    accuracy: int = Field(ge=0, le=100)
    characters_typed: int = Field(ge=0)
    duration: float = Field(ge=0)


class TotalStats(BaseModel):
    """Totals across every completed phrase."""

    total_sessions: int = 0
    total_characters: int = 0
    total_time: float = 0.0
    best_cpm: int = 0
    lessons_completed: int = 0
    current_streak: int = 0
    longest_streak: int = 0

    model_config = {"frozen": True}

    def record(self, session: SessionRecord, met_threshold: bool) -> "TotalStats":
        """Return new totals including ``session``.

        The streak grows only when the phrase met the source thresholds.
        """
        streak = self.current_streak + 1 if met_threshold else 0
        return TotalStats(
            total_sessions=self.total_sessions + 1,
            total_characters=self.total_characters + session.characters_typed,
            total_time=self.total_time + session.duration,
            best_cpm=max(self.best_cpm, session.cpm),
            lessons_completed=self.lessons_completed + 1,
            current_streak=streak,
            longest_streak=max(self.longest_streak, streak),
        )

    def reset_streak(self) -> "TotalStats":
        return self.model_copy(update={"current_streak": 0})


def summary(stats: TotalStats, history: Sequence[SessionRecord]) -> Dict[str, Any]:
    """Build the statistics summary exported alongside the history."""
    if history:
        average_accuracy = round_half_up(sum(r.accuracy for r in history) / len(history))
    else:
        average_accuracy = 0
    return {
        "total_sessions": stats.total_sessions,
        "total_characters": stats.total_characters,
        "total_time": stats.total_time,
        "average_cpm": calculate_average_cpm(r.cpm for r in history),
        "best_cpm": stats.best_cpm,
        "average_accuracy": average_accuracy,
        "lessons_completed": stats.lessons_completed,
    }
