# src/tenureminer/models.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Term:
    """One stint of service held by one person (end already resolved)."""
    person_id_or_label: str
    birth_date: date
    tenure_start: date
    tenure_end: date

    def is_active_on(self, day: date) -> bool:
        # both bounds inclusive
        return self.tenure_start <= day <= self.tenure_end


@dataclass(frozen=True)
class ReferenceYear:
    year: int
    anchor_date: date


@dataclass(frozen=True)
class ActiveSample:
    reference_year: ReferenceYear
    term: Term


@dataclass(frozen=True)
class AgeSample:
    year: int
    age: int

    def as_dict(self) -> dict:
        return {"year": self.year, "age": self.age}
