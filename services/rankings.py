import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from services import records
from services.annual_averages import load_report, mean_average
from services.scoring.numeric import round_half_up
from services.scoring.pipeline import term_average_of
from services.scoring.ranking import rank, student_position
from utils.errors import BatchRequestError

logger = logging.getLogger(__name__)


def cohort_averages(
    db: Session,
    academic_year_id: int,
    term_id: Optional[int] = None,
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    [{"student_id", "student_name", "matricule", "level_id", "average"}] for every enrolled
    student whose marks could be fetched. No marks (or none in that term) -> average 0.
    """
    cohort = []
    enrollments = records.fetch_enrollments(
        db, academic_year_id=academic_year_id, level_id=level_id, department_id=department_id
    )
    for enrollment, student in enrollments:
        report = load_report(db, student.id, academic_year_id)
        if report is None:
            continue
        average, _ = term_average_of(report, term_id)
        cohort.append({
            "student_id": student.id,
            "student_name": student.name,
            "matricule": student.matricule,
            "level_id": enrollment.level_id,
            "average": average,
        })
    return cohort


def class_ranking(
    db: Session,
    academic_year_id: Optional[int],
    term_id: Optional[int] = None,
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
) -> Dict[str, Any]:
    if not academic_year_id:
        raise BatchRequestError("academic_year_id is required")

    ranked = rank(cohort_averages(db, academic_year_id, term_id, level_id, department_id))
    logger.info(f"Ranked {len(ranked)} students (year={academic_year_id}, term={term_id}, level={level_id})")

    return {
        "success": True,
        "data": {
            "academic_year_id": academic_year_id,
            "term_id": term_id,
            "scope": "term" if term_id else "annual",
            "class_average": mean_average([e["average"] for e in ranked]),
            "students": [{**e, "average": round_half_up(e["average"])} for e in ranked],
        },
    }


def student_ranking(
    db: Session,
    student_id: int,
    academic_year_id: Optional[int],
    term_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Position of one student inside the cohort sharing the student's level and department."""
    if not academic_year_id:
        raise BatchRequestError("academic_year_id is required")

    rows = records.fetch_enrollments(db, academic_year_id=academic_year_id, student_id=student_id)
    if not rows:
        return {"success": False, "error": {"code": 404, "message": "Student is not enrolled in this academic year"}}

    enrollment, student = rows[0]
    cohort = cohort_averages(
        db, academic_year_id, term_id, level_id=enrollment.level_id, department_id=student.department_id
    )
    position, total = student_position(cohort, student_id)
    average = next((e["average"] for e in cohort if e["student_id"] == student_id), 0)

    return {
        "success": True,
        "data": {
            "student_id": student_id,
            "academic_year_id": academic_year_id,
            "term_id": term_id,
            "average": round_half_up(average),
            "position": position,
            "total": total,
        },
    }
