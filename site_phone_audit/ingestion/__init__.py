"""Utilities for importing the expected phone numbers an audit checks against."""
from __future__ import annotations

from .loaders import SetupError, UnsupportedFileTypeError, ensure_expected_phones, load_expected_phones
from .models import ExpectedPhoneRecord, ExpectedPhones

__all__ = [
    "ExpectedPhoneRecord",
    "ExpectedPhones",
    "SetupError",
    "UnsupportedFileTypeError",
    "ensure_expected_phones",
    "load_expected_phones",
]
