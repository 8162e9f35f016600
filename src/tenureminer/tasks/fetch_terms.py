"""
Fetch 'position held' statements for one legislative position from the
SPARQL query service and store the raw result document as JSON.

Usage:
    python -m tenureminer.tasks.fetch_terms
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from ..config.config import Config
from ..config.params import Params
from ..io.sparql import SparqlClient, build_terms_query

logger = logging.getLogger(__name__)


def run(raw_file: str, position_qid: str, client: SparqlClient | None = None) -> Path:
    if client is None:
        Config.validate()
        client = SparqlClient(
            Config.SPARQL_ENDPOINT,
            Config.USER_AGENT,
            timeout=Params.request_timeout,
            max_retries=Params.max_retries,
            retry_sleep=Params.retry_sleep,
        )

    logger.info("Fetching terms for position %s", position_qid)
    doc = client.query(build_terms_query(position_qid))

    out = Path(raw_file)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as f:
        json.dump(doc, f, ensure_ascii=False)
    logger.info("Wrote %d raw rows -> %s", len(doc["results"]["bindings"]), out)
    return out


def main():
    run(Params.raw_file, Params.position_qid)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    main()
