# src/tenureminer/timeseries.py
from __future__ import annotations

import logging
from typing import Iterable, List

import pandas as pd

from .ages import to_age_samples
from .config.params import SamplingConfig
from .models import AgeSample, ReferenceYear, Term
from .sampler import sample_active
from .utils.date_helpers import reference_years

logger = logging.getLogger(__name__)


def build_reference_years(config: SamplingConfig) -> List[ReferenceYear]:
    return reference_years(config.year_start, config.year_end,
                           config.anchor_month, config.anchor_day)


def compute_age_samples(terms: Iterable[Term], config: SamplingConfig) -> List[AgeSample]:
    """Sampler -> aggregator: one AgeSample per (reference year, active term)."""
    years = build_reference_years(config)
    active = sample_active(terms, years)
    samples = to_age_samples(active)
    logger.info("Computed %d age samples for %d-%d", len(samples), config.year_start, config.year_end)
    return samples


def samples_to_frame(samples: Iterable[AgeSample]) -> pd.DataFrame:
    df = pd.DataFrame([s.as_dict() for s in samples], columns=["year", "age"])
    return df.astype({"year": "int64", "age": "int64"})
