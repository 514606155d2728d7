from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.academic_years import AcademicYear
from models.class_students import ClassStudent
from models.courses import Course
from models.departments import Department
from models.marks import Mark
from models.students import Student
from models.terms import Term


def get_academic_year(db: Session, academic_year_id: int) -> Optional[AcademicYear]:
    return db.query(AcademicYear).filter(AcademicYear.id == academic_year_id).first()


def fetch_department_names(db: Session) -> Dict[int, str]:
    return {d.id: d.name for d in db.query(Department).all()}


def get_enrollment(db: Session, student_id: int, academic_year_id: int) -> Optional[ClassStudent]:
    return (
        db.query(ClassStudent)
        .filter(ClassStudent.student_id == student_id, ClassStudent.academic_year_id == academic_year_id)
        .first()
    )


def fetch_enrollments(
    db: Session,
    academic_year_id: Optional[int] = None,
    student_id: Optional[int] = None,
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
) -> List[Tuple[ClassStudent, Student]]:
    """Enrollments joined with their student, in enrollment id order (stable ranking input)."""
    query = db.query(ClassStudent, Student).join(Student, Student.id == ClassStudent.student_id)

    if academic_year_id is not None:
        query = query.filter(ClassStudent.academic_year_id == academic_year_id)
    if student_id is not None:
        query = query.filter(ClassStudent.student_id == student_id)
    if level_id is not None:
        query = query.filter(ClassStudent.level_id == level_id)
    if department_id is not None:
        query = query.filter(Student.department_id == department_id)

    return query.order_by(ClassStudent.id).all()


def fetch_student_marks(db: Session, student_id: int, academic_year_id: int) -> List[Dict[str, Any]]:
    rows = (
        db.query(Mark, Course, Term)
        .join(Course, Course.id == Mark.course_id)
        .join(Term, Term.id == Mark.term_id)
        .filter(Mark.student_id == student_id, Mark.academic_year_id == academic_year_id)
        .order_by(Mark.id)
        .all()
    )
    return [
        {
            "course_id": course.id,
            "course_name": course.name,
            "coefficient": course.coefficient,
            "term_id": term.id,
            "term_label": term.label,
            "ca_score": mark.ca_score,
            "exam_score": mark.exam_score,
        }
        for mark, course, term in rows
    ]


def fetch_level_history(db: Session, student_id: int, level_id: int, academic_year_id: int) -> List[Dict[str, Any]]:
    """
    The student's enrollments at this level in academic years that started before
    academic_year_id, most recent first. Later years (e.g. the pending record a
    promotion run creates) never count, nor do years without a start_date.
    """
    current_start = db.query(AcademicYear.start_date).filter(AcademicYear.id == academic_year_id).scalar()
    if current_start is None:
        return []

    rows = (
        db.query(ClassStudent, AcademicYear)
        .join(AcademicYear, AcademicYear.id == ClassStudent.academic_year_id)
        .filter(
            ClassStudent.student_id == student_id,
            ClassStudent.level_id == level_id,
            AcademicYear.start_date < current_start,
        )
        .order_by(AcademicYear.start_date.desc(), AcademicYear.id.desc())
        .all()
    )
    return [
        {
            "student_id": enrollment.student_id,
            "level_id": enrollment.level_id,
            "academic_year_id": enrollment.academic_year_id,
            "academic_year_label": year.label,
        }
        for enrollment, year in rows
    ]
