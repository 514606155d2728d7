import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from schemas.scoring import StudentReport, TermReport
from services import records
from services.scoring.numeric import round_half_up
from services.scoring.pipeline import build_student_report
from services.scoring.promotion import PromotionPolicy, decide_promotion
from services.scoring.ranking import rank
from utils.errors import BatchRequestError

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(round_half_up(Decimal(part) * 100 / Decimal(whole), 0))


def mean_average(values: List[Decimal]) -> float:
    if not values:
        return 0.0
    return round_half_up(sum(values, Decimal(0)) / len(values))


# ==========================================================
# [Serialization] pipeline output -> JSON friendly dicts
# ==========================================================

def serialize_term(term: TermReport) -> Dict[str, Any]:
    return {
        "term_id": term.term_id,
        "term_label": term.term_label,
        "average": round_half_up(term.average),
        "subjects": [
            {
                "course_id": s.course_id,
                "course_name": s.course_name,
                "ca_score": round_half_up(s.ca_score),
                "exam_score": round_half_up(s.exam_score),
                "coefficient": round_half_up(s.coefficient),
                "average": round_half_up(s.evaluation.average),
                "weighted": round_half_up(s.evaluation.weighted),
                "grade": s.evaluation.grade,
                "remark": s.evaluation.remark,
            }
            for s in term.subjects
        ],
    }


def load_report(db: Session, student_id: int, academic_year_id: int) -> Optional[StudentReport]:
    """Fetch and compute one student's report; None (logged) when the fetch fails."""
    try:
        marks = records.fetch_student_marks(db, student_id, academic_year_id)
    except SQLAlchemyError:
        logger.exception(f"Error fetching marks for student {student_id} (year {academic_year_id})")
        return None
    return build_student_report(student_id, academic_year_id, marks)


# ==========================================================
# [Batch] annual averages
# ==========================================================

def calculate_annual_averages(
    db: Session,
    academic_year_id: Optional[int],
    student_id: Optional[int] = None,
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
    policy: Optional[PromotionPolicy] = None,
) -> Dict[str, Any]:
    if not academic_year_id:
        raise BatchRequestError("academic_year_id is required")

    policy = policy or PromotionPolicy.from_settings(settings)
    enrollments = records.fetch_enrollments(
        db,
        academic_year_id=academic_year_id,
        student_id=student_id,
        level_id=level_id,
        department_id=department_id,
    )
    logger.info(f"Calculating annual averages: year={academic_year_id}, students={len(enrollments)}")

    results = []
    for enrollment, student in enrollments:
        report = load_report(db, student.id, academic_year_id)
        if report is None:
            continue

        current_level = int(enrollment.level_id)
        decision = decide_promotion(report.annual_average, current_level, policy)
        results.append({
            "student_id": student.id,
            "student_name": student.name,
            "matricule": student.matricule,
            "current_level": current_level,
            "average": report.annual_average,
            "is_eligible_for_promotion": decision.promoted,
            "next_level": decision.next_level,
            "term_averages": [serialize_term(t) for t in report.terms],
            "total_subjects": report.total_subjects,
        })

    # position is computed on full precision, the rounded value is only reported
    ranked = rank(results)
    averages = [entry["average"] for entry in ranked]
    students = []
    for entry in ranked:
        average = entry.pop("average")
        students.append({**entry, "annual_average": round_half_up(average)})

    total = len(students)
    eligible = sum(1 for s in students if s["is_eligible_for_promotion"])

    return {
        "success": True,
        "timestamp": now_iso(),
        "academic_year_id": academic_year_id,
        "summary": {
            "total_students": total,
            "eligible_for_promotion": eligible,
            "promotion_rate": percentage(eligible, total),
            "class_average": mean_average(averages),
        },
        "students": students,
    }
