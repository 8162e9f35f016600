# src/tenureminer/normalizer.py
"""
Turn raw tenure records into ``Term`` objects.

Accepts either a SPARQL JSON result document::

    {"results": {"bindings": [{"personLabel": {"value": "..."}, "dob": {...}, ...}]}}

or a plain list of flat dicts (``{"label": ..., "birth_date": ..., ...}``).
"""
from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import InvalidRecords, MalformedDate
from .models import Term
from .utils.date_helpers import is_missing, parse_date, resolve_end

logger = logging.getLogger(__name__)

# target field -> accepted source keys, first match wins
FIELD_ALIASES: Dict[str, tuple] = {
    "label":  ("personLabel", "label", "person_id_or_label", "name", "person"),
    "birth":  ("dob", "birth_date", "geburtsdatum"),
    "start":  ("start", "tenure_start"),
    "end":    ("end", "tenure_end"),
}


def load_records(path: Union[str, Path]) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidRecords(f"Cannot read records from {path}: {exc}") from exc


def iter_rows(doc: Any) -> List[Dict[str, Any]]:
    """Flatten a SPARQL result document (or a list of dicts) into plain rows."""
    if isinstance(doc, dict):
        try:
            bindings = doc["results"]["bindings"]
        except (KeyError, TypeError) as exc:
            raise InvalidRecords("Expected a SPARQL result document with results.bindings") from exc
    elif isinstance(doc, list):
        bindings = doc
    else:
        raise InvalidRecords(f"Unsupported record container: {type(doc).__name__}")

    if not isinstance(bindings, list):
        raise InvalidRecords(f"Expected a list of records, got {type(bindings).__name__}")

    rows = []
    for i, b in enumerate(bindings):
        if not isinstance(b, dict):
            raise InvalidRecords(f"record #{i} is a {type(b).__name__}, expected an object")
        rows.append({k: (v.get("value") if isinstance(v, dict) else v) for k, v in b.items()})
    return rows


def _pick(row: Dict[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in row:
            return row[key]
    return None


def normalize_row(row: Dict[str, Any], missing_end_fallback: date, index: int = 0) -> Term:
    label = _pick(row, "label")
    label = "" if is_missing(label) else str(label).strip()
    where = f"record #{index} ({label})" if label else f"record #{index}"

    birth = _pick(row, "birth")
    start = _pick(row, "start")
    if is_missing(birth):
        raise MalformedDate(birth, where, "birth date is missing")
    if is_missing(start):
        raise MalformedDate(start, where, "tenure start is missing")

    end = _pick(row, "end")
    if is_missing(end):
        logger.debug("%s: no end date, using %s", where, missing_end_fallback.isoformat())

    return Term(
        person_id_or_label=label,
        birth_date=parse_date(birth, where),
        tenure_start=parse_date(start, where),
        tenure_end=resolve_end(end, missing_end_fallback, where),
    )


def normalize_records(doc: Any, missing_end_fallback: date) -> List[Term]:
    """Map every raw row to a ``Term``, in input order, without merging stints."""
    rows = iter_rows(doc)
    terms = [normalize_row(r, missing_end_fallback, i) for i, r in enumerate(rows)]

    open_ended = sum(1 for r in rows if is_missing(_pick(r, "end")))
    logger.info("Normalized %d terms (%d without end date -> %s)",
                len(terms), open_ended, missing_end_fallback.isoformat())
    return terms
