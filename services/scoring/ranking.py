"""
Class ranking by average, highest first.

- Python's sort is stable, so equal averages keep their input order.
- Positions are sorted indexes (1, 2, 3, ...), ties do not share a rank.
- Students without marks rank with average 0 instead of being dropped.
"""

from decimal import Decimal
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Tuple

from services.scoring.numeric import parse_numeric

EMPTY_COHORT_POSITION = (1, 1)


def _average_key(item: Mapping[str, Any]) -> Decimal:
    average = parse_numeric(item.get("average"))
    return average if average is not None else Decimal(0)


def rank(cohort: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    cohort: [{"student_id": ..., "average": ...}, ...]
    Returns new dicts (input keys kept) with "average" normalised and "position" added.
    """
    entries = [{**item, "average": _average_key(item)} for item in cohort]
    ranked = sorted(entries, key=lambda e: e["average"], reverse=True)
    for idx, entry in enumerate(ranked, start=1):
        entry["position"] = idx
    return ranked


def student_position(cohort: Iterable[Mapping[str, Any]], student_id: Hashable) -> Tuple[int, int]:
    """
    (position, total) of one student.
    Empty cohort -> (1, 1): nothing to compare against.
    A student missing from the cohort is ranked as one more entry with average 0.
    """
    entries = list(cohort)
    if not entries:
        return EMPTY_COHORT_POSITION

    if not any(e.get("student_id") == student_id for e in entries):
        entries.append({"student_id": student_id, "average": 0})

    ranked = rank(entries)
    position = next(e["position"] for e in ranked if e["student_id"] == student_id)
    return position, len(ranked)
