"""Browser sessions that navigate the audited site."""

from .base import BrowserConfig
from .session import NavigationError, SiteSession

__all__ = ["BrowserConfig", "NavigationError", "SiteSession"]
