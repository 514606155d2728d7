from decimal import Decimal

import pytest

from services.scoring.evaluator import (
    compute_average,
    compute_grade,
    compute_remark,
    compute_weighted,
    evaluate,
)


def test_average_of_both_scores():
    assert compute_average(12, 16) == 14


def test_single_score_is_not_halved():
    assert compute_average(15, None) == 15
    assert compute_average(None, 15) == 15
    assert evaluate(15, None, 2) == evaluate(None, 15, 2)


def test_no_scores_gives_no_average():
    for coefficient in (1, 3, "x", None):
        result = evaluate(None, None, coefficient)
        assert result.average is None
        assert result.weighted is None
        assert result.grade is None
        assert result.remark is None


def test_numeric_text_is_parsed():
    result = evaluate("12.5", "13.5", "2")
    assert result.average == Decimal("13")
    assert result.weighted == Decimal("26")
    assert result.grade == "E"


def test_unparsable_coefficient_only_drops_weighted():
    result = evaluate(14, 16, "two")
    assert result.average == 15
    assert result.weighted is None
    assert result.grade == "D"
    assert result.remark == "Fair"


def test_unparsable_score_counts_as_missing():
    assert compute_average("12,5", 14) == 14


def test_weighted_score():
    assert compute_weighted(Decimal("15"), 3) == 45
    assert compute_weighted(None, 3) is None


@pytest.mark.parametrize("average, grade", [
    (20, "A"),
    (18.5, "A"),
    (18.4, "B"),
    (16.5, "B"),
    (16.4, "C"),
    (15.5, "C"),
    (15.4, "D"),
    (13.5, "D"),
    (13.4, "E"),
    (12, "E"),
    (11.99, "F"),
    (0, "F"),
])
def test_grade_bands(average, grade):
    assert compute_grade(average) == grade


def test_grade_above_maximum_is_undefined():
    assert compute_grade(20.5) is None
    assert compute_remark(compute_grade(20.5)) is None


@pytest.mark.parametrize("grade, remark", [
    ("A", "Excellent"), ("B", "Very Good"), ("C", "Good"),
    ("D", "Fair"), ("E", "Pass"), ("F", "Fail"), (None, None),
])
def test_remarks(grade, remark):
    assert compute_remark(grade) == remark


def test_evaluation_result_is_frozen():
    result = evaluate(10, 10, 1)
    with pytest.raises(Exception):
        result.average = Decimal(0)
