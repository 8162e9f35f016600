# src/tenureminer/sampler.py
"""
Interval sampler: which terms are active on each reference year's anchor date.

A term counts as active for a year when
``tenure_start <= anchor_date <= tenure_end`` (both bounds inclusive).
Output order is year-major (ascending years), then terms in input order.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Sequence

from .errors import InvalidInterval
from .models import ActiveSample, ReferenceYear, Term

logger = logging.getLogger(__name__)


def validate_terms(terms: Sequence[Term]) -> None:
    """Raise ``InvalidInterval`` for the first term that starts after it ends."""
    for i, t in enumerate(terms):
        if t.tenure_start > t.tenure_end:
            raise InvalidInterval(t, index=i)


def iter_active(terms: Sequence[Term], years: Iterable[ReferenceYear]) -> Iterator[ActiveSample]:
    for ry in years:
        n = 0
        for t in terms:
            if t.is_active_on(ry.anchor_date):
                n += 1
                yield ActiveSample(ry, t)
        logger.debug("%d: %d terms active on %s", ry.year, n, ry.anchor_date.isoformat())


def sample_active(terms: Iterable[Term], years: Iterable[ReferenceYear]) -> List[ActiveSample]:
    """Pair every reference year with the terms active on its anchor date.

    The whole batch is validated before any sample is produced, so a single
    bad interval aborts the run instead of yielding partial output.
    """
    terms = list(terms)
    years = list(years)
    validate_terms(terms)

    out = list(iter_active(terms, years))
    logger.info("Sampled %d terms over %d reference years -> %d active samples",
                len(terms), len(years), len(out))
    return out
