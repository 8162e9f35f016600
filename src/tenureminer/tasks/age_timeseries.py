"""
Build the yearly age time series from a raw terms file.

Writes into ``outdir``:
- age_samples.csv          one row per (year, serving member)
- age_summary_by_year.csv  members, mean/median/min/max age per year
- age_timeseries.html      chart of the summary

Usage:
    python -m tenureminer.tasks.age_timeseries
"""
from __future__ import annotations

import logging
import os

import pandas as pd

from ..config.params import Params, SamplingConfig
from ..normalizer import load_records, normalize_records
from ..timeseries import compute_age_samples, samples_to_frame
from ..utils.metrics_helpers import yearly_age_summary
from ..utils.utils_plots import plot_age_timeseries, save_figure

logger = logging.getLogger(__name__)

SAMPLES_CSV = "age_samples.csv"
SUMMARY_CSV = "age_summary_by_year.csv"
CHART_HTML = "age_timeseries.html"


def run(raw_file: str, outdir: str, config: SamplingConfig, plot: bool = True) -> pd.DataFrame:
    """Load -> normalize -> sample -> age; write CSVs (and chart). Returns the summary."""
    os.makedirs(outdir, exist_ok=True)

    doc = load_records(raw_file)
    terms = normalize_records(doc, config.missing_end_fallback)
    samples = compute_age_samples(terms, config)

    df = samples_to_frame(samples)
    samples_path = os.path.join(outdir, SAMPLES_CSV)
    df.to_csv(samples_path, index=False)
    logger.info("Wrote %d age samples -> %s", len(df), samples_path)

    summary = yearly_age_summary(df)
    summary_path = os.path.join(outdir, SUMMARY_CSV)
    summary.to_csv(summary_path, index=False)
    logger.info("Wrote yearly summary (%d years) -> %s", len(summary), summary_path)

    if plot:
        stand = f"Stand: {config.missing_end_fallback.strftime('%d.%m.%Y')}"
        fig = plot_age_timeseries(summary, title="Durchschnittsalter der Abgeordneten", stand_text=stand)
        save_figure(fig, os.path.join(outdir, CHART_HTML))

    return summary


def main():
    run(Params.raw_file, Params.outdir, SamplingConfig.from_params(Params))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    main()
