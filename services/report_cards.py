from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from services import records
from services.annual_averages import load_report, serialize_term
from services.rankings import cohort_averages
from services.scoring.numeric import round_half_up
from services.scoring.pipeline import term_average_of
from services.scoring.ranking import student_position
from utils.errors import BatchRequestError


def student_report_card(
    db: Session,
    student_id: Optional[int],
    academic_year_id: Optional[int],
    term_id: Optional[int] = None,
) -> Dict[str, Any]:
    if not student_id or not academic_year_id:
        raise BatchRequestError("student_id and academic_year_id are required")

    rows = records.fetch_enrollments(db, academic_year_id=academic_year_id, student_id=student_id)
    if not rows:
        return {"success": False, "error": {"code": 404, "message": "Student is not enrolled in this academic year"}}
    enrollment, student = rows[0]

    report = load_report(db, student_id, academic_year_id)
    if report is None:
        return {"success": False, "error": {"code": 503, "message": "Marks could not be loaded"}}

    terms = report.terms
    if term_id is not None:
        terms = [t for t in terms if t.term_id == term_id]

    cohort = cohort_averages(
        db, academic_year_id, term_id, level_id=enrollment.level_id, department_id=student.department_id
    )
    position, total = student_position(cohort, student_id)
    average, _ = term_average_of(report, term_id)

    return {
        "success": True,
        "data": {
            "student_id": student.id,
            "student_name": student.name,
            "matricule": student.matricule,
            "level_id": enrollment.level_id,
            "is_repeater": bool(enrollment.is_repeater),
            "academic_year_id": academic_year_id,
            "term_id": term_id,
            "terms": [serialize_term(t) for t in terms],
            "average": round_half_up(average),
            "annual_average": round_half_up(report.annual_average),
            "position": position,
            "total": total,
        },
    }
