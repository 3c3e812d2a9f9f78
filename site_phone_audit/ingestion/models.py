"""Data models produced by the expected-phone loader."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True, slots=True)
class ExpectedPhoneRecord:
    """One row of ground truth read from the expected-numbers file."""

    phone: str
    raw_phone: str
    country: Optional[str] = None
    row: Optional[int] = None

    def describe(self) -> str:
        """Return a short label used in log lines and assertion messages."""

        parts = []
        if self.country:
            parts.append(self.country)
        if self.row is not None:
            parts.append(f"row {self.row}")
        return ", ".join(parts)


@dataclass(frozen=True, slots=True)
class ExpectedPhones:
    """Immutable, ordered collection of expected phone numbers.

    Produced once by suite setup and passed explicitly to every reconciliation.
    Duplicates are kept because the same number may be listed for several
    countries.
    """

    records: Tuple[ExpectedPhoneRecord, ...] = ()
    source: Optional[Path] = None
    phones: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "phones", tuple(record.phone for record in self.records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.phones)

    def __contains__(self, phone: object) -> bool:
        return phone in self.phones

    def record_for(self, phone: str) -> Optional[ExpectedPhoneRecord]:
        for record in self.records:
            if record.phone == phone:
                return record
        return None

    @property
    def origin(self) -> str:
        return str(self.source) if self.source is not None else "expected phones"


__all__ = ["ExpectedPhoneRecord", "ExpectedPhones"]
