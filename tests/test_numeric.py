from decimal import Decimal

import pytest

from services.scoring.numeric import parse_numeric, round_half_up


@pytest.mark.parametrize("value, expected", [
    (12, Decimal("12")),
    (12.3, Decimal("12.3")),
    ("15.75", Decimal("15.75")),
    ("  8 ", Decimal("8")),
    (Decimal("9.5"), Decimal("9.5")),
    ("-1.5", Decimal("-1.5")),
])
def test_parse_numeric_accepts_plain_numbers(value, expected):
    assert parse_numeric(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "12,5", "1_000", "1 000", "NaN", "inf", True, float("nan"), [1]])
def test_parse_numeric_fails_soft(value):
    assert parse_numeric(value) is None


def test_round_half_up_rounds_at_reporting_boundary():
    assert round_half_up(Decimal("12.345")) == 12.35
    assert round_half_up(Decimal("12.344")) == 12.34
    # binary float 2.675 is 2.67499..., parsing through repr keeps it 2.675
    assert round_half_up(2.675) == 2.68
    assert round_half_up(Decimal("89") / 6) == 14.83
    assert round_half_up(None) is None


def test_round_half_up_places():
    assert round_half_up(Decimal("66.65"), 1) == 66.7
    assert round_half_up(Decimal("24.5"), 0) == 25.0
