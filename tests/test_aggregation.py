from decimal import Decimal

from services.scoring.aggregation import aggregate_annual, aggregate_term, subject_annual_figure


def test_empty_term_is_zero():
    assert aggregate_term([]) == 0


def test_term_average_is_coefficient_weighted():
    evaluations = [
        {"average": 15, "coefficient": 3},
        {"average": 13, "coefficient": 2},
        {"average": 18, "coefficient": 1},
    ]
    assert aggregate_term(evaluations) == Decimal(89) / 6


def test_courses_without_average_are_left_out():
    with_blank = [{"average": 12, "coefficient": 2}, {"average": None, "coefficient": 4}]
    assert aggregate_term(with_blank) == 12


def test_non_positive_or_bad_coefficient_is_excluded():
    evaluations = [
        {"average": 10, "coefficient": 2},
        {"average": 20, "coefficient": 0},
        {"average": 20, "coefficient": -1},
        {"average": 20, "coefficient": "n/a"},
    ]
    assert aggregate_term(evaluations) == 10


def test_only_unscored_courses_is_zero():
    assert aggregate_term([{"average": None, "coefficient": 3}]) == 0


def test_subject_figure_is_plain_mean_of_terms():
    assert subject_annual_figure([10, 14]) == 12
    assert subject_annual_figure([10, None]) == 10
    assert subject_annual_figure([]) is None


def test_annual_single_course():
    # figure 12, weighted 36 over coefficient 3
    assert aggregate_annual({"math": [10, 14]}, {"math": 3}) == 12


def test_annual_weights_each_course_by_coefficient():
    per_course = {"math": [10, 14], "eng": [16]}
    coefficients = {"math": 3, "eng": 1}
    assert aggregate_annual(per_course, coefficients) == Decimal(36 + 16) / 4


def test_annual_skips_courses_without_terms_or_weight():
    per_course = {"math": [10, 14], "eng": [], "art": [20]}
    coefficients = {"math": 3, "eng": 2}
    assert aggregate_annual(per_course, coefficients) == 12


def test_annual_zero_total_coefficient():
    assert aggregate_annual({}, {}) == 0
    assert aggregate_annual({"math": [15]}, {"math": 0}) == 0


def test_annual_keeps_full_precision():
    result = aggregate_annual({"a": [10, 11, 11]}, {"a": 1})
    assert result == Decimal(32) / 3
    assert result != Decimal("10.67")
