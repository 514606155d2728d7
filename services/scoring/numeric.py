"""
Parse-or-null helper shared by every scoring stage, plus the reporting rounding.

- Store drivers hand back NUMERIC columns as Decimal or text; callers hand in
  int/float. Everything is normalised to Decimal so accumulation never loses
  precision.
- Anything that is not a plain decimal number becomes None instead of raising,
  so one malformed row cannot abort a whole class aggregation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional


def parse_numeric(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        # repr gives the shortest round-tripping text: 12.3 -> Decimal("12.3")
        parsed = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        # "12,5" / "1_000" / "1 000" are rejected, no locale guessing
        if not text or "," in text or "_" in text or " " in text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


def round_half_up(value: Any, places: int = 2) -> Optional[float]:
    """Round for reporting only (12.345 -> 12.35). None stays None."""
    parsed = parse_numeric(value)
    if parsed is None:
        return None
    quantum = Decimal(1).scaleb(-places)
    return float(parsed.quantize(quantum, rounding=ROUND_HALF_UP))
