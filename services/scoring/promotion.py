"""
Year-end promotion rule and repeater detection (pure, no DB access).

State per student per academic year: pending -> promoted | repeated.
"""

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple

from services.scoring.numeric import parse_numeric


class PromotionStatus(str, enum.Enum):
    PENDING = "pending"
    PROMOTED = "promoted"
    REPEATED = "repeated"


@dataclass(frozen=True)
class PromotionPolicy:
    pass_threshold: Decimal = Decimal("12.0")
    max_promotable_level: int = 2

    @classmethod
    def from_settings(cls, settings, pass_threshold: Optional[float] = None) -> "PromotionPolicy":
        threshold = pass_threshold if pass_threshold is not None else settings.PROMOTION_PASS_THRESHOLD
        parsed = parse_numeric(threshold)
        if parsed is None:
            raise ValueError(f"Invalid promotion pass threshold: {threshold!r}")
        return cls(
            pass_threshold=parsed,
            max_promotable_level=settings.PROMOTION_MAX_LEVEL,
        )


@dataclass(frozen=True)
class PromotionDecision:
    status: PromotionStatus
    next_level: int

    @property
    def promoted(self) -> bool:
        return self.status is PromotionStatus.PROMOTED


def is_eligible(annual_average: Any, current_level: int, policy: PromotionPolicy) -> bool:
    average = parse_numeric(annual_average)
    if average is None:
        return False
    return average >= policy.pass_threshold and current_level <= policy.max_promotable_level


def decide_promotion(annual_average: Any, current_level: int, policy: PromotionPolicy) -> PromotionDecision:
    # levels above max_promotable_level always repeat, whatever the score
    if is_eligible(annual_average, current_level, policy):
        return PromotionDecision(PromotionStatus.PROMOTED, current_level + 1)
    return PromotionDecision(PromotionStatus.REPEATED, current_level)


def detect_repeater(
    enrollments: Iterable[Mapping[str, Any]],
    student_id: Hashable,
    level_id: int,
    academic_year_id: Hashable,
) -> Tuple[bool, List[Hashable]]:
    """
    A student repeats a level when they already sat it in an earlier academic
    year. enrollments is that earlier history (services/records.py only returns
    years that started before the current one); the current year is ignored if
    present. Returns (is_repeater, those earlier year ids).
    """
    previous_years = [
        e["academic_year_id"]
        for e in enrollments
        if e["student_id"] == student_id
        and e["level_id"] == level_id
        and e["academic_year_id"] != academic_year_id
    ]
    return bool(previous_years), previous_years


def next_year_enrollment(
    student_id: int,
    next_academic_year_id: int,
    current_level: int,
    decision: PromotionDecision,
) -> Dict[str, Any]:
    """Field values of the pending enrollment for the following academic year."""
    return {
        "student_id": student_id,
        "academic_year_id": next_academic_year_id,
        "level_id": decision.next_level,
        "promoted": False,
        "promotion_status": PromotionStatus.PENDING.value,
        "is_repeater": decision.status is PromotionStatus.REPEATED,
        "previous_level_id": current_level,
    }
