"""Runtime configuration shared by browser sessions."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

from ..extraction import DEFAULT_SELECTOR_TIMEOUT_MS

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class BrowserConfig:
    """Options controlling how the audited site is opened and navigated."""

    base_url: str = ""
    headless: bool = True
    navigation_timeout: float = 30.0
    selector_timeout: float = DEFAULT_SELECTOR_TIMEOUT_MS / 1000
    cookie_notice_selector: Optional[str] = None
    cookie_accept_button: Optional[str] = None

    @property
    def selector_timeout_ms(self) -> float:
        return self.selector_timeout * 1000

    @property
    def navigation_timeout_ms(self) -> float:
        return self.navigation_timeout * 1000

    def resolve(self, path: str) -> str:
        """Return ``path`` as an absolute URL on :attr:`base_url`."""

        if not self.base_url:
            return path
        base = self.base_url if self.base_url.endswith("/") else f"{self.base_url}/"
        return urljoin(base, path.lstrip("/"))

    @classmethod
    def from_env(cls, **overrides) -> "BrowserConfig":
        """Build a configuration from ``PHONE_AUDIT_*`` environment variables."""

        values = {
            "base_url": os.environ.get("PHONE_AUDIT_BASE_URL", ""),
            "headless": os.environ.get("PHONE_AUDIT_HEADLESS", "true").strip().lower() in _TRUTHY,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
