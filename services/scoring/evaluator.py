"""(CA, exam, coefficient) -> average, weighted score, grade letter and remark, out of 20."""

from decimal import Decimal
from typing import Any, Optional

from schemas.scoring import EvaluationResult
from services.scoring.numeric import parse_numeric

# (lower bound, letter), checked top-down. The top band is closed at MAX_SCORE.
MAX_SCORE = Decimal("20")
GRADE_BANDS = (
    (Decimal("18.5"), "A"),
    (Decimal("16.5"), "B"),
    (Decimal("15.5"), "C"),
    (Decimal("13.5"), "D"),
    (Decimal("12"), "E"),
)
FAIL_GRADE = "F"

REMARKS = {
    "A": "Excellent",
    "B": "Very Good",
    "C": "Good",
    "D": "Fair",
    "E": "Pass",
    "F": "Fail",
}


def compute_average(ca_score: Any, exam_score: Any) -> Optional[Decimal]:
    """
    - both missing -> None
    - one missing -> the other score as is (partial data is not halved)
    - both present -> mean of the two
    """
    ca = parse_numeric(ca_score)
    exam = parse_numeric(exam_score)

    if ca is None and exam is None:
        return None
    if exam is None:
        return ca
    if ca is None:
        return exam
    return (ca + exam) / 2


def compute_weighted(average: Any, coefficient: Any) -> Optional[Decimal]:
    avg = parse_numeric(average)
    coef = parse_numeric(coefficient)
    if avg is None or coef is None:
        return None
    return avg * coef


def compute_grade(average: Any) -> Optional[str]:
    avg = parse_numeric(average)
    if avg is None or avg > MAX_SCORE:
        return None

    for lower, letter in GRADE_BANDS:
        if avg >= lower:
            return letter
    return FAIL_GRADE


def compute_remark(grade: Optional[str]) -> Optional[str]:
    if grade is None:
        return None
    return REMARKS.get(grade)


def evaluate(ca_score: Any, exam_score: Any, coefficient: Any) -> EvaluationResult:
    average = compute_average(ca_score, exam_score)
    grade = compute_grade(average)
    return EvaluationResult(
        average=average,
        weighted=compute_weighted(average, coefficient),
        grade=grade,
        remark=compute_remark(grade),
    )
