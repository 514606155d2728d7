"""
Per-subject summary statistics of a term (results summary sheet).

- enrollment: boys / girls / total students with a mark in the subject
- passed: average >= pass mark (default 10), with percentages
- low: average <= low mark (default 5)
- class average of the subject

The pass/low marks are independent of the A-F grade bands.

Cohort level (one term average per student who sat):

- passed / failed against the student pass average (default 12)
- department performance: pass rate, mean average and a weighted score
  (65% pass rate + 35% mean average on a 100 scale by default)
- top / bottom students
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from services.scoring.evaluator import MAX_SCORE
from services.scoring.numeric import parse_numeric, round_half_up
from services.scoring.ranking import rank

MALE = {"m", "male", "boy", "b"}
FEMALE = {"f", "female", "girl", "g"}


def _gender_key(gender: Optional[str]) -> Optional[str]:
    if not gender:
        return None
    value = gender.strip().lower()
    if value in MALE:
        return "boys"
    if value in FEMALE:
        return "girls"
    return None


def _counter() -> Dict[str, int]:
    return {"boys": 0, "girls": 0, "total": 0}


def _bump(counter: Dict[str, int], gender: Optional[str]) -> None:
    counter["total"] += 1
    if gender:
        counter[gender] += 1


def _percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round_half_up(Decimal(part) * 100 / Decimal(whole), 1)


def subject_statistics(
    rows: Iterable[Mapping[str, Any]],
    pass_mark: Any = 10,
    low_mark: Any = 5,
) -> List[Dict[str, Any]]:
    """
    rows: [{"student_id", "gender", "course_id", "course_name", "average"}, ...]
    One row per student and course; rows without an average are enrolled but not scored.
    """
    pass_value = parse_numeric(pass_mark)
    low_value = parse_numeric(low_mark)
    subjects: Dict[Any, Dict[str, Any]] = {}

    for row in rows:
        stat = subjects.get(row["course_id"])
        if stat is None:
            stat = {
                "course_id": row["course_id"],
                "subject": row.get("course_name"),
                "enrollment": _counter(),
                "passed": _counter(),
                "low": _counter(),
                "_scores": [],
            }
            subjects[row["course_id"]] = stat

        gender = _gender_key(row.get("gender"))
        _bump(stat["enrollment"], gender)

        average = parse_numeric(row.get("average"))
        if average is None:
            continue
        stat["_scores"].append(average)
        if pass_value is not None and average >= pass_value:
            _bump(stat["passed"], gender)
        if low_value is not None and average <= low_value:
            _bump(stat["low"], gender)

    results = []
    for stat in subjects.values():
        scores = stat.pop("_scores")
        enrollment, passed = stat["enrollment"], stat["passed"]
        passed["boys_percentage"] = _percentage(passed["boys"], enrollment["boys"])
        passed["girls_percentage"] = _percentage(passed["girls"], enrollment["girls"])
        passed["total_percentage"] = _percentage(passed["total"], enrollment["total"])
        stat["class_average"] = round_half_up(sum(scores, Decimal(0)) / len(scores)) if scores else 0.0
        results.append(stat)
    return results


# ==========================================================
# Cohort: one term average per student
# ==========================================================

def _threshold(value: Any, name: str) -> Decimal:
    parsed = parse_numeric(value)
    if parsed is None:
        raise ValueError(f"Invalid {name}: {value!r}")
    return parsed


def _gender_group(students: List[Mapping[str, Any]], whole: int) -> Dict[str, Any]:
    group = _counter()
    for s in students:
        _bump(group, _gender_key(s.get("gender")))
    group["total_percentage"] = _percentage(group["total"], whole)
    return group


def cohort_results(students: Iterable[Mapping[str, Any]], pass_average: Any = 12) -> Dict[str, Any]:
    """
    students: [{"student_id", "gender", "department_id", "average", ...}, ...]
    Only students who sat. Returns the ranked cohort and the passed / failed groups.
    """
    pass_value = _threshold(pass_average, "pass average")
    ranked = rank(students)
    passed = [s for s in ranked if s["average"] >= pass_value]
    failed = [s for s in ranked if s["average"] < pass_value]
    return {
        "students": ranked,
        "passed": _gender_group(passed, len(ranked)),
        "failed": _gender_group(failed, len(ranked)),
    }


def top_and_bottom(ranked: List[Dict[str, Any]], count: int = 3) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    if count <= 0:
        return [], []
    return ranked[:count], ranked[-count:]


def department_performance(
    students: Iterable[Mapping[str, Any]],
    pass_average: Any = 12,
    pass_rate_weight: Any = "0.65",
    average_weight: Any = "0.35",
) -> List[Dict[str, Any]]:
    """
    Per department: students who sat, pass rate (%), mean average and
    score = pass_rate * pass_rate_weight + (mean / MAX_SCORE * 100) * average_weight.
    Highest score first, rank 1..n. Students without a department are left out.
    """
    pass_value = _threshold(pass_average, "pass average")
    rate_weight = _threshold(pass_rate_weight, "pass rate weight")
    avg_weight = _threshold(average_weight, "average weight")

    departments: Dict[Any, Dict[str, Any]] = {}
    for s in students:
        department_id = s.get("department_id")
        if department_id is None:
            continue
        dept = departments.setdefault(department_id, {
            "department_id": department_id,
            "department_name": s.get("department_name"),
            "_averages": [],
        })
        average = parse_numeric(s.get("average"))
        dept["_averages"].append(average if average is not None else Decimal(0))

    results = []
    for dept in departments.values():
        averages = dept.pop("_averages")
        sat = len(averages)
        passed = sum(1 for a in averages if a >= pass_value)
        pass_rate = Decimal(passed) * 100 / sat
        mean = sum(averages, Decimal(0)) / sat
        score = pass_rate * rate_weight + (mean / MAX_SCORE * 100) * avg_weight
        results.append({
            **dept,
            "students_who_sat": sat,
            "passed": passed,
            "pass_rate": round_half_up(pass_rate),
            "average_academic_performance": round_half_up(mean),
            "department_score": round_half_up(score),
            "_score": score,
        })

    results.sort(key=lambda d: d["_score"], reverse=True)
    for idx, dept in enumerate(results, start=1):
        dept.pop("_score")
        dept["rank"] = idx
    return results
