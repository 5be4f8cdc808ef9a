"""Export Service Module

Writes n-gram rankings, practice history and statistics summaries as CSV.
Every export accepts either a file path or an open text stream.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TextIO, Union

from models.exceptions import EmptyInputError
from models.practice_history import SessionRecord

logger = logging.getLogger(__name__)

Output = Union[str, TextIO]

HISTORY_COLUMNS = [
    "session",
    "timestamp",
    "source",
    "lesson",
    "cpm",
    "accuracy",
    "characters_typed",
    "duration",
]

STATS_LABELS = {
    "total_sessions": "Total Sessions",
    "total_characters": "Total Characters Typed",
    "total_time": "Total Time (seconds)",
    "average_cpm": "Average CPM",
    "best_cpm": "Best CPM",
    "average_accuracy": "Average Accuracy (%)",
    "lessons_completed": "Total Lessons Completed",
}


def export_filename(kind: str, now: Optional[datetime] = None) -> str:
    """File name such as ``bigrams_2024-05-01T10-30-00.csv``."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{kind}_{stamp}.csv"


def _write_rows(output: Output, columns: List[str], rows: Iterable[Dict[str, Any]]) -> int:
    close_file = False
    if isinstance(output, str):
        f: TextIO = open(output, "w", newline="", encoding="utf-8")
        close_file = True
    else:
        f = output

    count = 0
    try:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
            count += 1
    finally:
        if close_file:
            f.close()
    return count


def export_ngrams(
    data: Union[Sequence[str], Mapping[str, int], Sequence[Sequence[Any]]], output: Output
) -> int:
    """
    Export n-grams with their rank.

    A plain list of n-grams gives ``rank,ngram`` rows. A frequency mapping or
    a ranked list of ``(ngram, frequency)`` pairs adds a ``frequency`` column.
    Rows keep the order of ``data``.

    Returns:
        Number of rows written
    """
    if isinstance(data, Mapping):
        pairs = list(data.items())
    elif data and not isinstance(data[0], str):
        pairs = [(item[0], item[1]) for item in data]
    else:
        rows = [{"rank": i, "ngram": ngram} for i, ngram in enumerate(data, start=1)]
        return _write_rows(output, ["rank", "ngram"], rows)

    rows = [
        {"rank": i, "ngram": ngram, "frequency": freq}
        for i, (ngram, freq) in enumerate(pairs, start=1)
    ]
    return _write_rows(output, ["rank", "ngram", "frequency"], rows)


def export_history(records: Sequence[SessionRecord], output: Output) -> int:
    """
    Export completed phrases, one row each.

    Raises:
        EmptyInputError: If there is no history to export
    """
    if not records:
        raise EmptyInputError("No session history to export")
    rows = [
        {
            "session": i,
            "timestamp": record.timestamp.isoformat(),
            "source": record.source,
            "lesson": record.lesson,
            "cpm": record.cpm,
            "accuracy": record.accuracy,
            "characters_typed": record.characters_typed,
            "duration": record.duration,
        }
        for i, record in enumerate(records, start=1)
    ]
    logger.info("Exporting %d history records", len(rows))
    return _write_rows(output, HISTORY_COLUMNS, rows)


def export_stats(stats_summary: Mapping[str, Any], output: Output) -> int:
    rows = [
        {"metric": label, "value": stats_summary.get(key, 0) or 0}
        for key, label in STATS_LABELS.items()
    ]
    return _write_rows(output, ["metric", "value"], rows)
