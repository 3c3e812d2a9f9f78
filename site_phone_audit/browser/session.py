"""Playwright backed browser session that visits the pages of an audited site.

Prerequisites
-------------
* Requires :mod:`playwright` with Chromium installed (``playwright install``).
* Pages are visited sequentially in a single tab: link-based targets click a
  link on whatever page the previous target left open.
"""
from __future__ import annotations

import contextlib
import logging
import re
from typing import Any, Dict, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, expect, sync_playwright

from ..extraction import extract_page
from ..models import PageExtraction, PageTarget
from ..normalize import Normalizer, normalize_phone
from .base import BrowserConfig

LOGGER = logging.getLogger(__name__)


class NavigationError(RuntimeError):
    """Raised when a page target cannot be reached."""


class SiteSession:
    """Open one Chromium page and extract phone numbers from configured targets.

    Parameters
    ----------
    config:
        Optional :class:`BrowserConfig` (or a mapping of its fields).
    page:
        An already open Playwright page, for instance the ``page`` fixture of
        pytest-playwright. When given, the session does not launch or close a
        browser itself.
    normalizer:
        Phone normalizer passed to the extractor.
    """

    def __init__(
        self,
        config: Optional[BrowserConfig | Dict[str, Any]] = None,
        *,
        page: Optional[Page] = None,
        normalizer: Normalizer = normalize_phone,
    ) -> None:
        if isinstance(config, dict):
            config = BrowserConfig(**config)
        self.config = config or BrowserConfig()
        self._normalizer = normalizer
        self._page = page
        self._owns_browser = page is None
        self._playwright = None
        self._browser = None

    def __enter__(self) -> "SiteSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session is not open.")
        return self._page

    def open(self) -> Page:
        if self._page is None:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.config.headless)
            self._page = self._browser.new_page()
            LOGGER.debug("Launched Chromium (headless=%s)", self.config.headless)
        self._page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
        return self._page

    def close(self) -> None:
        if not self._owns_browser:
            return
        if self._browser is not None:
            LOGGER.debug("Closing Chromium")
            with contextlib.suppress(PlaywrightError):
                self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        self._page = None

    def visit(self, target: PageTarget) -> PageExtraction:
        """Navigate to ``target`` and extract phone numbers from its selectors."""

        page = self.page
        try:
            if target.link_name:
                LOGGER.info("Navigating to %s via link %r", target.name, target.link_name)
                page.get_by_role("link", name=target.link_name).click()
            else:
                url = self.config.resolve(target.path or "/")
                LOGGER.info("Navigating to %s at %s", target.name, url)
                page.goto(url, wait_until="domcontentloaded")
            if target.url_pattern:
                expect(page).to_have_url(re.compile(target.url_pattern))
            self.dismiss_cookie_notice()
        except (PlaywrightError, AssertionError) as exc:
            raise NavigationError(f"Unable to reach {target.name}: {exc}") from exc

        return extract_page(
            page,
            target.selectors,
            name=target.name,
            timeout_ms=self.config.selector_timeout_ms,
            normalizer=self._normalizer,
            url=page.url,
        )

    def dismiss_cookie_notice(self) -> bool:
        """Accept a visible cookie notice so it does not cover the page."""

        selector = self.config.cookie_notice_selector
        button = self.config.cookie_accept_button
        if not selector or not button:
            return False
        page = self.page
        notice = page.locator(selector)
        if not notice.is_visible():
            return False
        LOGGER.info("Found cookie notice, clicking %r", button)
        page.get_by_role("button", name=button).click()
        expect(notice).not_to_be_visible()
        return True
