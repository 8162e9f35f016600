import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["year", "members", "age_mean", "age_median", "age_min", "age_max"]


def yearly_age_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Per-year member count and age statistics from (year, age) samples.

    Years without any sample do not appear in the result.
    """
    missing = {"year", "age"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")
    if df.empty:
        logger.warning("yearly_age_summary: no samples, returning empty summary")
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    g = df.groupby("year", sort=True)["age"]
    summary = pd.DataFrame({
        "members": g.size(),
        "age_mean": g.mean(),
        "age_median": g.median(),
        "age_min": g.min(),
        "age_max": g.max(),
    }).reset_index()

    summary["age_mean"] = np.round(summary["age_mean"].astype(float), 2)
    logger.info("Computed yearly_age_summary with %d rows", len(summary))
    return summary[SUMMARY_COLUMNS]
