import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from services import records
from services.annual_averages import load_report, now_iso, percentage
from services.scoring.numeric import round_half_up
from services.scoring.promotion import detect_repeater

logger = logging.getLogger(__name__)


def check_repeaters(
    db: Session,
    academic_year_id: Optional[int] = None,
    level_id: Optional[int] = None,
) -> Dict[str, Any]:
    enrollments = records.fetch_enrollments(db, academic_year_id=academic_year_id, level_id=level_id)
    analysis = []

    for enrollment, student in enrollments:
        try:
            history = records.fetch_level_history(db, student.id, enrollment.level_id, enrollment.academic_year_id)
        except SQLAlchemyError:
            logger.exception(f"Error checking previous enrollments for student {student.id}")
            continue

        report = load_report(db, student.id, enrollment.academic_year_id)
        if report is None:
            continue

        is_repeater, previous_years = detect_repeater(
            history, student.id, enrollment.level_id, enrollment.academic_year_id
        )
        labels = {h["academic_year_id"]: h["academic_year_label"] for h in history}

        status_updated = bool(enrollment.is_repeater) != is_repeater
        if status_updated:
            logger.info(f"Correcting is_repeater for enrollment {enrollment.id}: {enrollment.is_repeater} -> {is_repeater}")
            enrollment.is_repeater = is_repeater

        analysis.append({
            "student_id": student.id,
            "student_name": student.name,
            "matricule": student.matricule,
            "current_level": enrollment.level_id,
            "academic_year_id": enrollment.academic_year_id,
            "is_repeater": is_repeater,
            "repeat_count": len(previous_years),
            "previous_years_in_same_level": [labels[y] for y in previous_years],
            "annual_average": round_half_up(report.annual_average),
            "status_updated": status_updated,
        })

    db.commit()

    total = len(analysis)
    repeaters = sum(1 for s in analysis if s["is_repeater"])
    return {
        "success": True,
        "timestamp": now_iso(),
        "summary": {
            "total_students": total,
            "total_repeaters": repeaters,
            "repeater_percentage": percentage(repeaters, total),
            "status_updates_made": sum(1 for s in analysis if s["status_updated"]),
        },
        "students": analysis,
    }
