"""Tests for models.typing_metrics."""
import pytest

from models.typing_metrics import (
    calculate_accuracy,
    calculate_average_cpm,
    calculate_cpm,
    count_correct_chars,
    format_time,
    meets_threshold,
    round_half_up,
)


@pytest.mark.parametrize("value,expected", [(2.5, 3), (2.4, 2), (0.5, 1), (3.0, 3)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_cpm() -> None:
    assert calculate_cpm(50, 15) == 200
    assert calculate_cpm(10, 0) == 0


def test_accuracy() -> None:
    assert calculate_accuracy(9, 10) == 90
    assert calculate_accuracy(1, 8) == 13
    assert calculate_accuracy(0, 0) == 0


def test_average_cpm() -> None:
    assert calculate_average_cpm([200, 250, 251]) == 234
    assert calculate_average_cpm([]) == 0
    assert calculate_average_cpm(None) == 0


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "00:00:00"), (59.9, "00:00:59"), (61, "00:01:01"), (3725, "01:02:05")],
)
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected


def test_meets_threshold() -> None:
    assert meets_threshold(200, 100, 200, 100)
    assert not meets_threshold(199, 100, 200, 100)
    assert not meets_threshold(300, 99, 200, 100)


def test_count_correct_chars() -> None:
    assert count_correct_chars("th er", "th er") == 5
    assert count_correct_chars("th er", "tx e") == 3
    assert count_correct_chars("ab", "abcdef") == 2
