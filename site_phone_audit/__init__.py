"""Top-level package for auditing the phone numbers shown on a website."""

from . import models  # noqa: F401
from .extraction import SelectorTimeout, extract_page, extract_phone_numbers  # noqa: F401
from .ingestion import (  # noqa: F401
    ExpectedPhoneRecord,
    ExpectedPhones,
    SetupError,
    ensure_expected_phones,
    load_expected_phones,
)
from .models import (  # noqa: F401
    Mismatch,
    ObservedPhone,
    PageExtraction,
    PageTarget,
    ReconciliationReport,
)
from .normalize import normalize_phone  # noqa: F401
from .reconcile import ReconciliationMismatch, check_backward, check_forward, reconcile  # noqa: F401

__all__ = [
    "ExpectedPhoneRecord",
    "ExpectedPhones",
    "Mismatch",
    "ObservedPhone",
    "PageExtraction",
    "PageTarget",
    "ReconciliationMismatch",
    "ReconciliationReport",
    "SelectorTimeout",
    "SetupError",
    "check_backward",
    "check_forward",
    "ensure_expected_phones",
    "extract_page",
    "extract_phone_numbers",
    "load_expected_phones",
    "normalize_phone",
    "reconcile",
    "ingestion",
    "browser",
    "orchestrator",
]
