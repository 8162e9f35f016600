# src/tenureminer/ages.py
"""
Age aggregator: one (year, age) sample per active term.

Ages use whole 365-day blocks, ``floor(days / 365)``, ignoring leap years.
Existing charts were produced with this formula, so it is kept as-is.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List

from .models import ActiveSample, AgeSample
from .utils.date_helpers import days_between

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365


def age_in_years(birth_date: date, on: date) -> int:
    # floor division: a birth after `on` gives a negative age
    return days_between(birth_date, on) // DAYS_PER_YEAR


def to_age_sample(sample: ActiveSample) -> AgeSample:
    ry = sample.reference_year
    return AgeSample(year=ry.year, age=age_in_years(sample.term.birth_date, ry.anchor_date))


def to_age_samples(samples: Iterable[ActiveSample]) -> List[AgeSample]:
    out = [to_age_sample(s) for s in samples]
    negative = sum(1 for s in out if s.age < 0)
    if negative:
        # kept in the output, rejecting them is up to the caller
        logger.warning("%d age samples are negative (birth date after anchor date)", negative)
    return out
