# src/tenureminer/pipelines/cli.py
from __future__ import annotations
import logging
import os
from typing import Optional

import typer

from ..config.params import Params, SamplingConfig
from ..errors import TenureMinerError
from ..utils.date_helpers import parse_date
from .flows import pipeline_fetch, pipeline_ages, pipeline_all

app = typer.Typer(add_completion=False)
logger = logging.getLogger(__name__)

def _setup_logging():
    os.makedirs("logs", exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, str(Params.logging_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(os.path.join("logs", Params.logging_file), mode="w"),
            logging.StreamHandler(),
        ],
    )

def _execute(p):
    try:
        return p.run()
    except TenureMinerError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1)

@app.command()
def run(name: str = typer.Argument(..., help="fetch | ages | all")):
    """Run a named pipeline with the values from parameters.yml."""
    _setup_logging()
    name = name.lower()
    if name == "fetch":
        p = pipeline_fetch()
    elif name == "ages":
        p = pipeline_ages()
    elif name == "all":
        p = pipeline_all()
    else:
        raise typer.BadParameter("Unknown pipeline. Use: fetch, ages, all")
    _execute(p)

@app.command()
def ages(
    input: Optional[str] = typer.Option(None, "--input", "-i", help="Raw terms JSON file"),
    outdir: Optional[str] = typer.Option(None, "--outdir", "-o"),
    start: Optional[int] = typer.Option(None, help="First reference year"),
    end: Optional[int] = typer.Option(None, help="Last reference year"),
    fallback: Optional[str] = typer.Option(None, help="End date for open terms (YYYY-MM-DD)"),
):
    """Build the age time series, overriding parameters.yml where given."""
    _setup_logging()
    try:
        config = SamplingConfig(
            year_start=start if start is not None else Params.year_start,
            year_end=end if end is not None else Params.year_end,
            anchor_month=Params.anchor_month,
            anchor_day=Params.anchor_day,
            missing_end_fallback=parse_date(fallback or Params.missing_end_fallback),
        )
    except (TenureMinerError, ValueError) as e:
        raise typer.BadParameter(str(e))
    _execute(pipeline_ages(raw_file=input, outdir=outdir, config=config))

if __name__ == "__main__":
    app()
