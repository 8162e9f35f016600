# src/tenureminer/errors.py
from __future__ import annotations
from typing import Any, Optional


class TenureMinerError(Exception):
    """Base class for all errors raised by tenureminer."""


class MalformedDate(TenureMinerError, ValueError):
    """A date value could not be read as year/month/day."""

    def __init__(self, value: Any, record: Optional[str] = None, reason: str = ""):
        self.value = value
        self.record = record
        msg = f"Malformed date {value!r}"
        if record:
            msg += f" in {record}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvalidInterval(TenureMinerError, ValueError):
    """A term starts after it ends."""

    def __init__(self, term, index: Optional[int] = None):
        self.term = term
        self.index = index
        where = f"record #{index} " if index is not None else ""
        super().__init__(
            f"Invalid tenure interval for {where}{term.person_id_or_label!r}: "
            f"start {term.tenure_start.isoformat()} is after end {term.tenure_end.isoformat()}"
        )


class FetchError(TenureMinerError):
    """The remote query service did not return usable results."""


class InvalidRecords(TenureMinerError, ValueError):
    """A raw records file is unreadable or not shaped like tenure records."""
