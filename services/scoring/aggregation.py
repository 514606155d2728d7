"""
Term and annual aggregation over coefficient-weighted course averages.

- Full precision (Decimal) throughout; round only when reporting (numeric.round_half_up).
- A course only counts when it has an average and a positive coefficient.
- Zero total coefficient -> 0, never an exception.
"""

from decimal import Decimal
from typing import Any, Hashable, Iterable, Mapping, Optional, Sequence

from services.scoring.numeric import parse_numeric

ZERO = Decimal(0)


def _usable_coefficient(value: Any) -> Optional[Decimal]:
    coef = parse_numeric(value)
    if coef is None or coef <= 0:
        return None
    return coef


def aggregate_term(evaluations: Iterable[Mapping[str, Any]]) -> Decimal:
    """
    evaluations: [{"average": ..., "coefficient": ...}, ...]
    Courses without an average (no score entered) are left out of both sums.
    """
    weighted_sum = ZERO
    total_coefficient = ZERO

    for item in evaluations:
        average = parse_numeric(item.get("average"))
        coefficient = _usable_coefficient(item.get("coefficient"))
        if average is None or coefficient is None:
            continue
        weighted_sum += average * coefficient
        total_coefficient += coefficient

    if total_coefficient == 0:
        return ZERO
    return weighted_sum / total_coefficient


def subject_annual_figure(term_averages: Sequence[Any]) -> Optional[Decimal]:
    """Unweighted mean of one subject's term averages (each term counts once)."""
    values = [v for v in (parse_numeric(t) for t in term_averages) if v is not None]
    if not values:
        return None
    return sum(values, ZERO) / len(values)


def aggregate_annual(
    per_course_term_averages: Mapping[Hashable, Sequence[Any]],
    coefficients: Mapping[Hashable, Any],
) -> Decimal:
    weighted_sum = ZERO
    total_coefficient = ZERO

    for course_id, term_averages in per_course_term_averages.items():
        figure = subject_annual_figure(term_averages)
        coefficient = _usable_coefficient(coefficients.get(course_id))
        if figure is None or coefficient is None:
            continue
        weighted_sum += figure * coefficient
        total_coefficient += coefficient

    if total_coefficient == 0:
        return ZERO
    return weighted_sum / total_coefficient
