# src/tenureminer/io/sparql.py
"""
Minimal client for a SPARQL query service (wikidata by default).
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..errors import FetchError

logger = logging.getLogger(__name__)

RETRY_STATUS = {429, 500, 502, 503, 504}

TERMS_QUERY_TMPL = """
SELECT ?person ?personLabel ?dob ?start ?end WHERE {{
  ?person p:P39 ?held .
  ?held ps:P39 wd:{position_qid} ;
        pq:P580 ?start .
  OPTIONAL {{ ?held pq:P582 ?end . }}
  ?person wdt:P569 ?dob .
  SERVICE wikibase:label {{ bd:serviceParam wikibase:language "[AUTO_LANGUAGE],de,en". }}
}}
"""


def build_terms_query(position_qid: str) -> str:
    """One row per 'position held' statement with start and optional end."""
    return TERMS_QUERY_TMPL.format(position_qid=position_qid)


class SparqlClient:
    def __init__(
        self,
        endpoint: str,
        user_agent: str,
        timeout: int = 120,
        max_retries: int = 3,
        retry_sleep: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_sleep = retry_sleep
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/sparql-results+json",
            "User-Agent": user_agent,
        }

    def _sleep_for(self, resp: Optional[requests.Response]) -> float:
        if resp is not None:
            ra = resp.headers.get("Retry-After")
            if ra and ra.isdigit():
                return int(ra)
        return self.retry_sleep

    def query(self, sparql: str) -> Dict[str, Any]:
        """Run a query and return the decoded JSON result document."""
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            resp = None
            try:
                resp = self.session.get(
                    self.endpoint,
                    params={"query": sparql},
                    headers=self.headers,
                    timeout=self.timeout,
                )
                resp.raise_for_status()
            except (requests.ConnectionError, requests.Timeout, requests.HTTPError) as e:
                retryable = resp is None or resp.status_code in RETRY_STATUS
                if not retryable or attempt == attempts:
                    raise FetchError(f"SPARQL query failed after {attempt} attempt(s): {e}") from e
                wait = self._sleep_for(resp)
                logger.warning("Query attempt %d/%d failed (%s); retrying in %ss",
                               attempt, attempts, e, wait)
                time.sleep(wait)
                continue

            try:
                doc = resp.json()
                n = len(doc["results"]["bindings"])
            except (ValueError, KeyError, TypeError) as e:
                raise FetchError("Unexpected SPARQL response payload") from e
            logger.info("Query returned %d rows", n)
            return doc

        raise FetchError("SPARQL query was not attempted")
