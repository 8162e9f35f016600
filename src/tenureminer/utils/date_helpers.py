# src/tenureminer/utils/date_helpers.py
"""
Day-granularity date helpers shared by the normalizer, sampler and aggregator.

Only the calendar date of a value is ever used: ``"1950-06-15T13:45:00Z"``
and ``"1950-06-15"`` both become ``date(1950, 6, 15)``.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, List, Optional

from ..errors import MalformedDate
from ..models import ReferenceYear

# leading "+" is what the wikidata query service emits for some literals
_DATE_RE = re.compile(r"^\s*\+?(\d{4})-(\d{1,2})-(\d{1,2})(?:$|[T\s])")

MISSING_VALUES = (None, "", "null", "None")


def is_missing(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip() in MISSING_VALUES
    if isinstance(v, float):
        return math.isnan(v)
    return v is None


def parse_date(v: Any, record: Optional[str] = None) -> date:
    """Parse a date or date-time value, keeping only the date part.

    Raises ``MalformedDate`` for anything that does not start with a
    valid ``YYYY-MM-DD`` calendar date.
    """
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if not isinstance(v, str):
        raise MalformedDate(v, record, "expected an ISO date string")

    m = _DATE_RE.match(v)
    if not m:
        raise MalformedDate(v, record, "expected YYYY-MM-DD")
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDate(v, record, str(exc)) from exc


def resolve_end(v: Any, fallback: date, record: Optional[str] = None) -> date:
    """Return the parsed end date, or ``fallback`` when the source left it out."""
    if is_missing(v):
        return fallback
    return parse_date(v, record)


def anchor_date(year: int, month: int = 1, day: int = 1) -> date:
    return date(year, month, day)


def reference_years(year_start: int, year_end: int, month: int = 1, day: int = 1) -> List[ReferenceYear]:
    """Inclusive, ascending range of reference years with their anchor dates."""
    return [ReferenceYear(y, anchor_date(y, month, day)) for y in range(year_start, year_end + 1)]


def days_between(d1: date, d2: date) -> int:
    """Signed number of days from ``d1`` to ``d2``."""
    return (d2 - d1).days
