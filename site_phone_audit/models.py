"""Data models shared by the extractor, the reconciler, and the browser session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

FORWARD = "forward"
BACKWARD = "backward"


# --- Navigation Models ---

@dataclass(slots=True)
class PageTarget:
    """A page to visit and the selectors believed to hold its phone numbers.

    The page is reached either by loading ``path`` relative to the base URL or,
    when ``link_name`` is set, by clicking the link with that accessible name on
    the current page.
    """

    name: str
    selectors: List[str] = field(default_factory=list)
    path: Optional[str] = None
    link_name: Optional[str] = None
    url_pattern: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.selectors:
            raise ValueError(f"Page target '{self.name}' needs at least one selector.")
        if self.path is None and self.link_name is None:
            raise ValueError(f"Page target '{self.name}' needs either a path or a link name.")


# --- Extraction Models ---

@dataclass(slots=True)
class PageExtraction:
    """Phone numbers collected from a single page visit."""

    page: str
    phones: FrozenSet[str] = frozenset()
    raw_text: Dict[str, str] = field(default_factory=dict)
    missed_selectors: List[str] = field(default_factory=list)
    url: Optional[str] = None

    def __len__(self) -> int:
        return len(self.phones)

    def sorted_phones(self) -> List[str]:
        return sorted(self.phones)


@dataclass
class ObservedPhone:
    """A phone number seen on the site, annotated with every page that showed it."""

    phone: str
    pages: List[str] = field(default_factory=list)
    raw_text: Optional[str] = None


# --- Reconciliation Models ---

@dataclass(frozen=True, slots=True)
class Mismatch:
    """A single number that failed forward or backward containment."""

    direction: str
    phone: str
    origin: str
    raw_text: Optional[str] = None

    def message(self) -> str:
        if self.direction == FORWARD:
            text = f'Phone number "{self.phone}" from {self.origin} is not in the expected phone numbers.'
        else:
            text = f'Expected phone number "{self.phone}" from {self.origin} is not found on any visited page.'
        if self.raw_text and self.raw_text != self.phone:
            text += f" Raw text: {self.raw_text!r}."
        return text


@dataclass
class ReconciliationReport:
    """Outcome of comparing expected phone numbers with the ones found on the site."""

    expected: Tuple[str, ...]
    observed: List[ObservedPhone] = field(default_factory=list)
    mismatches: List[Mismatch] = field(default_factory=list)
    extractions: List[PageExtraction] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches

    @property
    def forward_failures(self) -> List[Mismatch]:
        return [mismatch for mismatch in self.mismatches if mismatch.direction == FORWARD]

    @property
    def backward_failures(self) -> List[Mismatch]:
        return [mismatch for mismatch in self.mismatches if mismatch.direction == BACKWARD]

    def summary(self) -> str:
        return (
            f"{len(self.expected)} expected, {len(self.observed)} observed on "
            f"{len(self.extractions)} page(s), {len(self.forward_failures)} unexpected, "
            f"{len(self.backward_failures)} missing"
        )

    def raise_for_mismatches(self) -> None:
        """Raise every mismatch as its own assertion, grouped together."""

        # Imported lazily to avoid a cycle with the reconciler module.
        from .reconcile import ReconciliationMismatch

        if self.ok:
            return
        errors = [ReconciliationMismatch(mismatch) for mismatch in self.mismatches]
        raise ExceptionGroup(f"Phone reconciliation failed: {self.summary()}", errors)


def pages_label(pages: Sequence[str]) -> str:
    """Return a human readable label for a list of page names."""

    if not pages:
        return "no page"
    return " and ".join(pages) if len(pages) <= 2 else ", ".join(pages[:-1]) + f" and {pages[-1]}"
