"""
schemas/scoring.py

Value types produced by the scoring pipeline (services/scoring).
All of them are derived from raw marks and frozen once built.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EvaluationResult(BaseModel):
    """One course evaluation: average of CA/exam, weighted score, grade letter, remark."""
    average: Optional[Decimal] = None
    weighted: Optional[Decimal] = None
    grade: Optional[str] = None
    remark: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TermAverage(BaseModel):
    student_id: int
    term_id: int
    average: Decimal

    model_config = ConfigDict(frozen=True)


class AnnualAverage(BaseModel):
    student_id: int
    academic_year_id: int
    average: Decimal

    model_config = ConfigDict(frozen=True)


class SubjectResult(BaseModel):
    """Per-course line of a term (report card cell data)."""
    course_id: int
    course_name: Optional[str] = None
    ca_score: Optional[Decimal] = None
    exam_score: Optional[Decimal] = None
    coefficient: Optional[Decimal] = None
    evaluation: EvaluationResult

    model_config = ConfigDict(frozen=True)


class TermReport(BaseModel):
    term_id: int
    term_label: str = ""
    average: Decimal
    subjects: List[SubjectResult] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class StudentReport(BaseModel):
    """Full chain output for one student and one academic year."""
    student_id: int
    academic_year_id: int
    terms: List[TermReport] = Field(default_factory=list)
    annual_average: Decimal = Decimal(0)
    total_subjects: int = 0

    model_config = ConfigDict(frozen=True)

    def term(self, term_id: int) -> Optional[TermReport]:
        for report in self.terms:
            if report.term_id == term_id:
                return report
        return None
