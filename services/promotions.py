"""
Year-end promotion run.

For every enrolled student of the year being finalized:
  1) annual average from source marks
  2) is_repeater reconciled against the enrollment history
  3) promoted / repeated decision, written on the current enrollment
  4) one pending enrollment for the next academic year

Re-running is idempotent: the next-year enrollment is looked up first and only
brought in line with the new decision (while still pending), never inserted twice.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from models.class_students import ClassStudent
from services import records
from services.annual_averages import load_report, mean_average, now_iso, percentage
from services.scoring.numeric import round_half_up
from services.scoring.promotion import (
    PromotionPolicy,
    PromotionStatus,
    decide_promotion,
    detect_repeater,
    next_year_enrollment,
)
from utils.errors import BatchRequestError

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"
LOCKED = "locked"


def _validate_years(db: Session, academic_year_id: Optional[int], next_academic_year_id: Optional[int]) -> None:
    if not academic_year_id:
        raise BatchRequestError("academic_year_id is required")
    if not next_academic_year_id:
        raise BatchRequestError("next_academic_year_id is required")
    if academic_year_id == next_academic_year_id:
        raise BatchRequestError("next_academic_year_id must differ from academic_year_id")

    current_year = records.get_academic_year(db, academic_year_id)
    if current_year is None:
        raise BatchRequestError(f"Academic year {academic_year_id} not found", code="NOT_FOUND")
    if current_year.is_closed:
        raise BatchRequestError(f"Academic year {current_year.label} is closed", code="YEAR_CLOSED")
    if records.get_academic_year(db, next_academic_year_id) is None:
        raise BatchRequestError(f"Academic year {next_academic_year_id} not found", code="NOT_FOUND")


def _sync_next_enrollment(db: Session, fields: Dict[str, Any]) -> str:
    existing = records.get_enrollment(db, fields["student_id"], fields["academic_year_id"])
    if existing is None:
        db.add(ClassStudent(**fields))
        return CREATED

    if existing.promotion_status != PromotionStatus.PENDING.value:
        # next year already has its own decision, leave history alone
        return LOCKED

    changed = False
    for key in ("level_id", "is_repeater", "previous_level_id"):
        if getattr(existing, key) != fields[key]:
            setattr(existing, key, fields[key])
            changed = True
    return UPDATED if changed else UNCHANGED


def run_promotions(
    db: Session,
    academic_year_id: Optional[int],
    next_academic_year_id: Optional[int],
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
    student_id: Optional[int] = None,
    pass_threshold: Optional[float] = None,
) -> Dict[str, Any]:
    _validate_years(db, academic_year_id, next_academic_year_id)
    policy = PromotionPolicy.from_settings(settings, pass_threshold)

    enrollments = records.fetch_enrollments(
        db,
        academic_year_id=academic_year_id,
        student_id=student_id,
        level_id=level_id,
        department_id=department_id,
    )
    logger.info(
        f"Promotion run: year={academic_year_id} -> {next_academic_year_id}, "
        f"students={len(enrollments)}, threshold={policy.pass_threshold}"
    )

    results = []
    for enrollment, student in enrollments:
        try:
            history = records.fetch_level_history(db, student.id, enrollment.level_id, academic_year_id)
        except SQLAlchemyError:
            logger.exception(f"Error fetching enrollment history for student {student.id}")
            continue

        report = load_report(db, student.id, academic_year_id)
        if report is None:
            continue

        current_level = int(enrollment.level_id)
        is_repeater, _ = detect_repeater(history, student.id, current_level, academic_year_id)
        repeater_corrected = bool(enrollment.is_repeater) != is_repeater
        enrollment.is_repeater = is_repeater

        decision = decide_promotion(report.annual_average, current_level, policy)
        enrollment.promotion_status = decision.status.value
        enrollment.promoted = decision.promoted

        next_enrollment = _sync_next_enrollment(
            db, next_year_enrollment(student.id, next_academic_year_id, current_level, decision)
        )
        db.flush()

        results.append({
            "student_id": student.id,
            "student_name": student.name,
            "matricule": student.matricule,
            "current_level": current_level,
            "annual_average": report.annual_average,
            "promotion_status": decision.status.value,
            "next_level": decision.next_level,
            "is_repeater": is_repeater,
            "repeater_corrected": repeater_corrected,
            "next_enrollment": next_enrollment,
        })

    db.commit()

    total = len(results)
    promoted = sum(1 for r in results if r["promotion_status"] == PromotionStatus.PROMOTED.value)
    summary = {
        "total_students": total,
        "promoted": promoted,
        "repeated": total - promoted,
        "promotion_rate": percentage(promoted, total),
        "class_average": mean_average([r["annual_average"] for r in results]),
        "enrollments_created": sum(1 for r in results if r["next_enrollment"] == CREATED),
        "enrollments_updated": sum(1 for r in results if r["next_enrollment"] == UPDATED),
    }
    for r in results:
        r["annual_average"] = round_half_up(r["annual_average"])

    return {
        "success": True,
        "timestamp": now_iso(),
        "academic_year_id": academic_year_id,
        "next_academic_year_id": next_academic_year_id,
        "summary": summary,
        "students": results,
    }
