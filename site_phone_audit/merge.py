"""Utility helpers for merging phone numbers extracted from multiple pages."""
from __future__ import annotations

from typing import Dict, Iterable, List

from .models import ObservedPhone, PageExtraction


def merge_extractions(extractions: Iterable[PageExtraction]) -> List[ObservedPhone]:
    """Union the phone sets of several page visits, keeping every page each number came from.

    Numbers are ordered by the page that first showed them, then alphabetically
    within a page, so the result is stable across runs.
    """

    merged: Dict[str, ObservedPhone] = {}
    ordered_keys: List[str] = []

    for extraction in extractions:
        if extraction is None:
            continue
        for phone in extraction.sorted_phones():
            if phone not in merged:
                merged[phone] = ObservedPhone(
                    phone=phone,
                    pages=[extraction.page],
                    raw_text=extraction.raw_text.get(phone),
                )
                ordered_keys.append(phone)
            else:
                observed = merged[phone]
                if extraction.page not in observed.pages:
                    observed.pages.append(extraction.page)

    return [merged[key] for key in ordered_keys]


__all__ = ["merge_extractions"]
