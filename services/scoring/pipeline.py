"""
Per-student chain: mark rows -> course evaluations -> term averages -> annual average.

Mark rows are plain dicts as returned by services/records.py:
    {"course_id", "course_name", "coefficient", "term_id", "term_label",
     "ca_score", "exam_score"}
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from schemas.scoring import EvaluationResult, StudentReport, SubjectResult, TermReport
from services.scoring.aggregation import aggregate_annual, aggregate_term, subject_annual_figure
from services.scoring.evaluator import compute_grade, compute_remark, compute_weighted, evaluate
from services.scoring.numeric import parse_numeric


@dataclass
class CourseTermAccumulator:
    """All marks of one course within one term (normally a single row)."""
    course_id: int
    course_name: Optional[str]
    coefficient: Any
    evaluations: List[EvaluationResult] = field(default_factory=list)
    ca_scores: List[Any] = field(default_factory=list)
    exam_scores: List[Any] = field(default_factory=list)

    def add(self, row: Mapping[str, Any]) -> None:
        self.ca_scores.append(row.get("ca_score"))
        self.exam_scores.append(row.get("exam_score"))
        self.evaluations.append(evaluate(row.get("ca_score"), row.get("exam_score"), self.coefficient))

    def result(self) -> EvaluationResult:
        if len(self.evaluations) == 1:
            return self.evaluations[0]
        average = subject_annual_figure([e.average for e in self.evaluations])
        grade = compute_grade(average)
        return EvaluationResult(
            average=average,
            weighted=compute_weighted(average, self.coefficient),
            grade=grade,
            remark=compute_remark(grade),
        )

    def subject_result(self) -> SubjectResult:
        return SubjectResult(
            course_id=self.course_id,
            course_name=self.course_name,
            ca_score=parse_numeric(self.ca_scores[-1]) if self.ca_scores else None,
            exam_score=parse_numeric(self.exam_scores[-1]) if self.exam_scores else None,
            coefficient=parse_numeric(self.coefficient),
            evaluation=self.result(),
        )


@dataclass
class TermAccumulator:
    term_id: int
    term_label: str
    courses: Dict[int, CourseTermAccumulator] = field(default_factory=dict)

    def report(self) -> TermReport:
        subjects = [acc.subject_result() for acc in self.courses.values()]
        average = aggregate_term(
            {"average": s.evaluation.average, "coefficient": s.coefficient} for s in subjects
        )
        return TermReport(term_id=self.term_id, term_label=self.term_label, average=average, subjects=subjects)


def build_student_report(student_id: int, academic_year_id: int, marks: Iterable[Mapping[str, Any]]) -> StudentReport:
    terms: Dict[int, TermAccumulator] = {}

    for row in marks:
        term = terms.get(row["term_id"])
        if term is None:
            term = TermAccumulator(term_id=row["term_id"], term_label=row.get("term_label") or "")
            terms[row["term_id"]] = term

        course = term.courses.get(row["course_id"])
        if course is None:
            course = CourseTermAccumulator(
                course_id=row["course_id"],
                course_name=row.get("course_name"),
                coefficient=row.get("coefficient"),
            )
            term.courses[row["course_id"]] = course
        course.add(row)

    term_reports = sorted((t.report() for t in terms.values()), key=lambda t: t.term_id)

    per_course_term_averages: Dict[int, List[Optional[Decimal]]] = {}
    coefficients: Dict[int, Any] = {}
    for report in term_reports:
        for subject in report.subjects:
            per_course_term_averages.setdefault(subject.course_id, []).append(subject.evaluation.average)
            coefficients[subject.course_id] = subject.coefficient

    return StudentReport(
        student_id=student_id,
        academic_year_id=academic_year_id,
        terms=term_reports,
        annual_average=aggregate_annual(per_course_term_averages, coefficients),
        total_subjects=len(per_course_term_averages),
    )


def term_average_of(report: StudentReport, term_id: Optional[int]) -> Tuple[Decimal, bool]:
    """(average, found) for one term; annual average when term_id is None."""
    if term_id is None:
        return report.annual_average, True
    term = report.term(term_id)
    if term is None:
        return Decimal(0), False
    return term.average, True
