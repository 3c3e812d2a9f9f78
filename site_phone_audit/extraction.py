"""Extract phone numbers from a rendered page using an ordered list of selectors."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Set

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .models import PageExtraction
from .normalize import Normalizer, normalize_phone

LOGGER = logging.getLogger(__name__)

DEFAULT_SELECTOR_TIMEOUT_MS = 5000


class ElementLike(Protocol):
    """Subset of :class:`playwright.sync_api.ElementHandle` used by the extractor."""

    def inner_text(self) -> str:  # pragma: no cover - runtime protocol
        """Return the rendered text of the element."""


class PageLike(Protocol):
    """Subset of :class:`playwright.sync_api.Page` used by the extractor."""

    def wait_for_selector(self, selector: str, *, state: str, timeout: float) -> Any:  # pragma: no cover
        """Block until ``selector`` reaches ``state`` or raise a timeout."""

    def query_selector_all(self, selector: str) -> List[ElementLike]:  # pragma: no cover
        """Return every element currently matching ``selector``."""


class SelectorTimeout(LookupError):
    """Raised when no element matching a selector attached within the wait budget."""

    def __init__(self, selector: str, timeout_ms: float) -> None:
        super().__init__(f'Selector "{selector}" did not attach within {timeout_ms:g} ms')
        self.selector = selector
        self.timeout_ms = timeout_ms


def extract_phone_numbers(
    page: PageLike,
    selectors: Sequence[str],
    *,
    timeout_ms: float = DEFAULT_SELECTOR_TIMEOUT_MS,
    normalizer: Normalizer = normalize_phone,
) -> Set[str]:
    """Return the set of normalized phone numbers found under ``selectors``."""

    extraction = extract_page(page, selectors, timeout_ms=timeout_ms, normalizer=normalizer)
    return set(extraction.phones)


def extract_page(
    page: PageLike,
    selectors: Sequence[str],
    *,
    name: str = "page",
    timeout_ms: float = DEFAULT_SELECTOR_TIMEOUT_MS,
    normalizer: Normalizer = normalize_phone,
    url: Optional[str] = None,
) -> PageExtraction:
    """Collect phone numbers from ``page`` into a :class:`PageExtraction`.

    Selectors are tried in order. A selector that does not attach within
    ``timeout_ms`` is recorded in ``missed_selectors`` and skipped; it is
    expected when a selector only applies to some page layouts. For the others,
    the text of every matching element that contains a ``+`` is normalized and
    added to the result, keeping the first raw text seen for each number.
    """

    phones: Set[str] = set()
    raw_text: Dict[str, str] = {}
    missed: List[str] = []

    for selector in selectors:
        try:
            _wait_for_attached(page, selector, timeout_ms)
        except SelectorTimeout as exc:
            LOGGER.warning('Selector "%s" not found on %s, skipping extraction. (%s)', selector, name, exc)
            missed.append(selector)
            continue

        for text in _element_texts(page.query_selector_all(selector)):
            if "+" not in text:
                continue
            phone = normalizer(text)
            if not phone:
                LOGGER.debug("Discarding %r from %s: no phone number after '+'", text, selector)
                continue
            if phone not in phones:
                LOGGER.debug("Discovered phone number %s on %s (selector=%s)", phone, name, selector)
                phones.add(phone)
                raw_text[phone] = text

    LOGGER.info("Found %s phone numbers on %s: %s", len(phones), name, sorted(phones))
    return PageExtraction(
        page=name,
        phones=frozenset(phones),
        raw_text=raw_text,
        missed_selectors=missed,
        url=url,
    )


def _wait_for_attached(page: PageLike, selector: str, timeout_ms: float) -> None:
    try:
        page.wait_for_selector(selector, state="attached", timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise SelectorTimeout(selector, timeout_ms) from exc


def _element_texts(elements: Iterable[ElementLike]) -> Iterable[str]:
    for element in elements:
        text = element.inner_text()
        if text:
            yield text


__all__ = [
    "DEFAULT_SELECTOR_TIMEOUT_MS",
    "ElementLike",
    "PageLike",
    "SelectorTimeout",
    "extract_page",
    "extract_phone_numbers",
]
