# tests/conftest.py
from datetime import date

import pytest

from tenureminer.config.params import SamplingConfig
from tenureminer.models import Term


def binding(label, dob, start, end=None):
    """One row shaped like a wikidata query service JSON binding."""
    row = {
        "person": {"type": "uri", "value": f"http://www.wikidata.org/entity/{label}"},
        "personLabel": {"type": "literal", "value": label},
        "dob": {"type": "literal", "value": dob},
        "start": {"type": "literal", "value": start},
    }
    if end is not None:
        row["end"] = {"type": "literal", "value": end}
    return row


@pytest.fixture
def fallback():
    return date(2022, 12, 31)


@pytest.fixture
def config(fallback):
    return SamplingConfig(year_start=1979, year_end=1991, missing_end_fallback=fallback)


@pytest.fixture
def term_1980s():
    return Term("Anna Beispiel", date(1940, 1, 1), date(1980, 1, 1), date(1990, 1, 1))


@pytest.fixture
def raw_doc():
    return {
        "head": {"vars": ["person", "personLabel", "dob", "start", "end"]},
        "results": {
            "bindings": [
                binding("Anna Beispiel", "1940-01-01T00:00:00Z",
                        "1980-01-01T00:00:00Z", "1990-01-01T00:00:00Z"),
                binding("Bernd Muster", "1965-07-20T00:00:00Z", "2017-10-24T00:00:00Z"),
                binding("Anna Beispiel", "1940-01-01T00:00:00Z",
                        "1994-11-10T00:00:00Z", "1998-10-26T00:00:00Z"),
            ]
        },
    }
