import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from services import records
from services.annual_averages import load_report, now_iso
from services.scoring.numeric import round_half_up
from services.scoring.statistics import cohort_results, department_performance, subject_statistics, top_and_bottom
from utils.errors import BatchRequestError

logger = logging.getLogger(__name__)


def _student_row(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {**entry, "average": round_half_up(entry["average"])}


def term_subject_statistics(
    db: Session,
    academic_year_id: Optional[int],
    term_id: Optional[int],
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
) -> Dict[str, Any]:
    if not academic_year_id:
        raise BatchRequestError("academic_year_id is required")
    if not term_id:
        raise BatchRequestError("term_id is required")

    rows = []
    sat = []
    students = 0
    department_names = records.fetch_department_names(db)
    enrollments = records.fetch_enrollments(
        db, academic_year_id=academic_year_id, level_id=level_id, department_id=department_id
    )
    for enrollment, student in enrollments:
        report = load_report(db, student.id, academic_year_id)
        if report is None:
            continue
        students += 1
        term = report.term(term_id)
        if term is None:
            continue

        sat.append({
            "student_id": student.id,
            "student_name": student.name,
            "gender": student.gender,
            "level_id": enrollment.level_id,
            "department_id": student.department_id,
            "department_name": department_names.get(student.department_id),
            "average": term.average,
        })
        for subject in term.subjects:
            rows.append({
                "student_id": student.id,
                "gender": student.gender,
                "course_id": subject.course_id,
                "course_name": subject.course_name,
                "average": subject.evaluation.average,
            })

    statistics = subject_statistics(rows, pass_mark=settings.STATS_PASS_MARK, low_mark=settings.STATS_LOW_MARK)
    cohort = cohort_results(sat, pass_average=settings.STATS_STUDENT_PASS_AVERAGE)
    ranked = [_student_row(s) for s in cohort["students"]]
    top, bottom = top_and_bottom(ranked)

    # department comparison only makes sense across departments
    departments = None
    if department_id is None:
        departments = department_performance(
            sat,
            pass_average=settings.STATS_STUDENT_PASS_AVERAGE,
            pass_rate_weight=settings.STATS_PASS_RATE_WEIGHT,
            average_weight=settings.STATS_AVERAGE_WEIGHT,
        )

    logger.info(
        f"Subject statistics: year={academic_year_id}, term={term_id}, "
        f"subjects={len(statistics)}, students_who_sat={len(sat)}"
    )

    return {
        "success": True,
        "timestamp": now_iso(),
        "data": {
            "academic_year_id": academic_year_id,
            "term_id": term_id,
            "total_students": students,
            "students_who_sat": len(sat),
            "pass_mark": settings.STATS_PASS_MARK,
            "low_mark": settings.STATS_LOW_MARK,
            "student_pass_average": settings.STATS_STUDENT_PASS_AVERAGE,
            "statistics": statistics,
            "pass_fail": {"passed": cohort["passed"], "failed": cohort["failed"]},
            "students": ranked,
            "top_students": top,
            "bottom_students": bottom,
            "department_performance": departments,
        },
    }
