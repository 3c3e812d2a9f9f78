"""Audit orchestrator that visits every page target and reconciles the results."""
from __future__ import annotations

import logging
from typing import Callable, List, Protocol, Sequence

from ..ingestion.loaders import SetupError
from ..models import PageExtraction, PageTarget, ReconciliationReport
from ..reconcile import reconcile

LOGGER = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Protocol defining the interface that browser sessions must follow."""

    def visit(self, target: PageTarget) -> PageExtraction:  # pragma: no cover - runtime protocol
        """Navigate to ``target`` and return the phone numbers found there."""


class PhoneAuditOrchestrator:
    """Visits the configured pages in order and reconciles their phone numbers."""

    def __init__(
        self,
        session: SessionProtocol,
        targets: Sequence[PageTarget],
        *,
        reconcile_function: Callable[[Sequence[str], Sequence[PageExtraction]], ReconciliationReport] = reconcile,
    ) -> None:
        self._session = session
        self._targets = list(targets)
        self._reconcile_function = reconcile_function

    @property
    def targets(self) -> List[PageTarget]:
        return list(self._targets)

    def collect(self) -> List[PageExtraction]:
        """Visit every target and return one extraction per page."""

        extractions: List[PageExtraction] = []
        for target in self._targets:
            try:
                LOGGER.debug("Visiting %s", target.name)
                extraction = self._session.visit(target)
            except Exception:
                LOGGER.exception("Visiting %s failed", target.name)
                raise
            if extraction.missed_selectors:
                LOGGER.info("Selectors not present on %s: %s", target.name, extraction.missed_selectors)
            extractions.append(extraction)
        return extractions

    def run(self, expected: Sequence[str]) -> ReconciliationReport:
        """Collect phone numbers from every page and reconcile them with ``expected``."""

        if not len(expected):
            raise SetupError("Refusing to reconcile against an empty list of expected phone numbers.")
        extractions = self.collect()
        report = self._reconcile_function(expected, extractions)
        LOGGER.info("Reconciliation finished: %s", report.summary())
        return report
