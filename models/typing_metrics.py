"""Typing speed and accuracy helpers used when a phrase is completed."""

from __future__ import annotations

import math
from typing import Iterable, Optional


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def calculate_cpm(total_characters: int, time_in_seconds: float) -> int:
    """Characters per minute, 0 when no time has elapsed."""
    if time_in_seconds <= 0:
        return 0
    return round_half_up(total_characters / time_in_seconds * 60)


def calculate_accuracy(correct_chars: int, total_chars: int) -> int:
    """Accuracy as a whole percentage, 0 when nothing was typed."""
    if total_chars <= 0:
        return 0
    return round_half_up(correct_chars / total_chars * 100)


def calculate_average_cpm(cpms: Optional[Iterable[int]]) -> int:
    values = list(cpms or [])
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def format_time(seconds: float) -> str:
    """Format a duration as ``HH:MM:SS``."""
    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def meets_threshold(cpm: int, accuracy: int, minimum_cpm: int, minimum_accuracy: int) -> bool:
    return cpm >= minimum_cpm and accuracy >= minimum_accuracy


def count_correct_chars(expected: str, typed: str) -> int:
    """Number of positions where ``typed`` matches ``expected``."""
    return sum(1 for exp, act in zip(expected, typed) if exp == act)
