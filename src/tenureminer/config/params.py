# src/tenureminer/config/params.py
import os, yaml
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from pathlib import Path

from ..utils.date_helpers import parse_date

def _load_yaml(path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

# choose parameters file; allow ENV-specific override
_loaded = {}

HERE = Path(__file__).resolve().parent
PARAMS_FILE = Path(os.getenv("TENUREMINER_PARAMS", HERE / "parameters.yml"))

if os.path.exists(PARAMS_FILE):
    _loaded = _load_yaml(PARAMS_FILE)
if not _loaded:
    raise RuntimeError(f"No parameters file found. Looked for: {PARAMS_FILE}")

class Params:
    logging_file = _loaded.get("file", "tenureminer.log")
    logging_level = _loaded.get("level", "INFO")

    year_start = int(_loaded.get("year_start", 1850))
    year_end = int(_loaded.get("year_end", 2022))
    anchor_month = int(_loaded.get("anchor_month", 1))
    anchor_day = int(_loaded.get("anchor_day", 1))
    # yaml may already hand us a date object for unquoted values
    missing_end_fallback = str(_loaded.get("missing_end_fallback", "2022-12-31"))

    position_qid = _loaded.get("position_qid", "Q1939555")
    raw_file = _loaded.get("raw_file", "data/terms_raw.json")
    outdir = _loaded.get("outdir", "output")

    request_timeout = int(_loaded.get("request_timeout", 120))
    max_retries = int(_loaded.get("max_retries", 3))
    retry_sleep = float(_loaded.get("retry_sleep", 10))


@dataclass(frozen=True)
class SamplingConfig:
    """Year range, anchor day and end-date fallback for one sampling run."""
    year_start: int
    year_end: int
    anchor_month: int = 1
    anchor_day: int = 1
    missing_end_fallback: date = date(2022, 12, 31)

    def __post_init__(self):
        if self.year_start > self.year_end:
            raise ValueError(
                f"year_start ({self.year_start}) must not be after year_end ({self.year_end})"
            )
        if self.year_start < MINYEAR or self.year_end > MAXYEAR:
            raise ValueError(
                f"Year range {self.year_start}-{self.year_end} is outside {MINYEAR}-{MAXYEAR}"
            )
        if (self.anchor_month, self.anchor_day) == (2, 29):
            raise ValueError("Anchor day 02-29 does not exist in every year")
        try:
            date(2001, self.anchor_month, self.anchor_day)
        except ValueError as exc:
            raise ValueError(
                f"Invalid anchor month/day: {self.anchor_month}-{self.anchor_day}"
            ) from exc
        if not isinstance(self.missing_end_fallback, date):
            raise TypeError("missing_end_fallback must be a datetime.date")

    @classmethod
    def from_params(cls, params=Params) -> "SamplingConfig":
        return cls(
            year_start=int(params.year_start),
            year_end=int(params.year_end),
            anchor_month=int(params.anchor_month),
            anchor_day=int(params.anchor_day),
            missing_end_fallback=parse_date(params.missing_end_fallback),
        )
