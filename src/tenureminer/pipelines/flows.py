# src/tenureminer/pipelines/flows.py
from __future__ import annotations
import logging
from ..config.params import Params, SamplingConfig
from ..tasks import (
    fetch_terms as T_fetch_terms,
    age_timeseries as T_age_timeseries,
)
from .runner import Pipeline, Step

logger = logging.getLogger(__name__)

def _common(**overrides):
    raw_file = overrides.get("raw_file") or Params.raw_file
    outdir = overrides.get("outdir") or Params.outdir
    config = overrides.get("config") or SamplingConfig.from_params(Params)
    return raw_file, outdir, config

def pipeline_fetch(**overrides) -> Pipeline:
    raw_file, _, _ = _common(**overrides)
    steps = [
        Step("fetch_terms", T_fetch_terms.run,
             dict(raw_file=raw_file, position_qid=Params.position_qid)),
    ]
    return Pipeline("fetch", steps)

def pipeline_ages(**overrides) -> Pipeline:
    raw_file, outdir, config = _common(**overrides)
    steps = [
        Step("age_timeseries", T_age_timeseries.run,
             dict(raw_file=raw_file, outdir=outdir, config=config)),
    ]
    return Pipeline("ages", steps)

def pipeline_all(**overrides) -> Pipeline:
    # fetch -> ages
    f = pipeline_fetch(**overrides).steps
    a = pipeline_ages(**overrides).steps
    return Pipeline("all", [*f, *a])
