"""Two-way reconciliation between expected phone numbers and the ones shown on the site.

Forward containment requires every extracted number to equal an expected one.
Backward containment requires every expected number to appear as a substring of
at least one extracted number, so a CSV entry without an extension still matches
the full number rendered on the page. The two checks are independent.
"""
from __future__ import annotations

import logging
from typing import Collection, Iterable, List, Mapping, Optional, Sequence

from .merge import merge_extractions
from .models import BACKWARD, FORWARD, Mismatch, PageExtraction, ReconciliationReport

LOGGER = logging.getLogger(__name__)


class ReconciliationMismatch(AssertionError):
    """Assertion raised for one phone number that failed reconciliation."""

    def __init__(self, mismatch: Mismatch) -> None:
        super().__init__(mismatch.message())
        self.mismatch = mismatch

    @property
    def phone(self) -> str:
        return self.mismatch.phone

    @property
    def direction(self) -> str:
        return self.mismatch.direction


def check_forward(
    expected: Collection[str],
    extracted: Iterable[str],
    *,
    origin: str = "page",
    raw_text: Optional[Mapping[str, str]] = None,
) -> List[Mismatch]:
    """Return a mismatch for every extracted number that is not exactly an expected number."""

    expected_set = set(expected)
    raw_text = raw_text or {}
    failures: List[Mismatch] = []
    for phone in sorted(extracted):
        if phone in expected_set:
            continue
        failures.append(Mismatch(direction=FORWARD, phone=phone, origin=origin, raw_text=raw_text.get(phone)))
    return failures


def check_backward(
    expected: Sequence[str],
    extracted_sets: Iterable[Iterable[str]],
    *,
    origin: str = "expected phone numbers",
) -> List[Mismatch]:
    """Return a mismatch for every expected number not contained in any extracted number.

    When ``expected`` is an :class:`~site_phone_audit.ingestion.models.ExpectedPhones`
    instance, each mismatch carries the original CSV text as ``raw_text`` and the
    country and row of the record in its origin.
    """

    observed = set()
    for extracted in extracted_sets:
        observed.update(extracted)

    record_for = getattr(expected, "record_for", None)
    failures: List[Mismatch] = []
    reported = set()
    for phone in expected:
        if phone in reported:
            continue
        if any(phone in candidate for candidate in observed):
            continue
        reported.add(phone)
        record = record_for(phone) if record_for is not None else None
        if record is None:
            failures.append(Mismatch(direction=BACKWARD, phone=phone, origin=origin))
            continue
        detail = record.describe()
        failures.append(
            Mismatch(
                direction=BACKWARD,
                phone=phone,
                origin=f"{origin} ({detail})" if detail else origin,
                raw_text=record.raw_phone,
            )
        )
    return failures


def reconcile(
    expected: Sequence[str],
    extractions: Sequence[PageExtraction],
    *,
    expected_origin: Optional[str] = None,
) -> ReconciliationReport:
    """Compare ``expected`` against every page extraction.

    ``expected`` may be a plain sequence of phone numbers or an
    :class:`~site_phone_audit.ingestion.models.ExpectedPhones` instance, whose
    source path is then used as the origin of backward failures.
    """

    if expected_origin is None:
        expected_origin = getattr(expected, "origin", "expected phone numbers")
    expected_phones = tuple(expected)

    mismatches: List[Mismatch] = []
    for extraction in extractions:
        forward = check_forward(
            expected_phones,
            extraction.phones,
            origin=extraction.page,
            raw_text=extraction.raw_text,
        )
        for mismatch in forward:
            LOGGER.debug("Forward mismatch: %s", mismatch.message())
        mismatches.extend(forward)

    backward = check_backward(
        expected,
        (extraction.phones for extraction in extractions),
        origin=expected_origin,
    )
    for mismatch in backward:
        LOGGER.debug("Backward mismatch: %s", mismatch.message())
    mismatches.extend(backward)

    return ReconciliationReport(
        expected=expected_phones,
        observed=merge_extractions(extractions),
        mismatches=mismatches,
        extractions=list(extractions),
    )


__all__ = ["ReconciliationMismatch", "check_backward", "check_forward", "reconcile"]
