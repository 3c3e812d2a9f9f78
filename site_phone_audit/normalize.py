"""Canonical phone number normalization shared by the CSV loader and the page extractor."""
from __future__ import annotations

import re
from typing import Any, Callable

Normalizer = Callable[[str], str]

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(raw: Any) -> str:
    """Return ``raw`` in the canonical ``+<digits>`` form.

    Everything before the first ``+`` is dropped (labels such as ``"USA"`` or
    ``"Call us:"``), then every character that is not an ASCII digit is removed
    from the remainder. Only the leading ``+`` survives; later ``+`` signs are
    treated as noise.

    An empty string means the fragment holds no phone number, either because it
    has no ``+`` or because no digit follows it.
    """

    if not isinstance(raw, str):
        return ""
    plus_index = raw.find("+")
    if plus_index == -1:
        return ""
    digits = _NON_DIGITS.sub("", raw[plus_index + 1 :])
    if not digits:
        return ""
    return f"+{digits}"


__all__ = ["Normalizer", "normalize_phone"]
