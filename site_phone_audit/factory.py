"""Factory helpers for constructing audit objects from configuration."""
from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List

from .browser.base import BrowserConfig
from .config import ConfigurationError, iter_enabled_page_configs
from .models import PageTarget


def build_page_targets(config: Dict[str, Any]) -> List[PageTarget]:
    """Instantiate the page targets defined in the configuration file."""

    targets: List[PageTarget] = []
    for index, page_cfg in enumerate(iter_enabled_page_configs(config)):
        name = page_cfg.get("name") or f"page {index + 1}"
        selectors = page_cfg.get("selectors") or []
        if isinstance(selectors, str):
            selectors = [selectors]
        try:
            targets.append(
                PageTarget(
                    name=name,
                    selectors=[str(selector) for selector in selectors],
                    path=page_cfg.get("path"),
                    link_name=page_cfg.get("link"),
                    url_pattern=page_cfg.get("url_pattern"),
                )
            )
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    return targets


def build_browser_config(config: Dict[str, Any], **overrides: Any) -> BrowserConfig:
    """Merge the ``browser`` section of the configuration with environment and CLI overrides."""

    options = dict(config.get("browser") or {})
    known = {item.name for item in fields(BrowserConfig)}
    unknown = sorted(set(options) - known)
    if unknown:
        raise ConfigurationError(f"Unknown browser options: {unknown}")

    browser_config = BrowserConfig.from_env(**options)
    for key, value in overrides.items():
        if value is not None:
            setattr(browser_config, key, value)
    return browser_config
