"""Configuration helpers for the phone audit."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}

DEFAULT_PAGES = [
    {
        "name": "homepage",
        "path": "/",
        "selectors": ['a[href^="tel:"]'],
    },
    {
        "name": "contact page",
        "link": "Contact Us Contact Us",
        "url_pattern": "contact-us",
        "selectors": ["span.pra-medium.pra-medium-font"],
    },
]


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' is malformed: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


def iter_enabled_page_configs(config: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
    pages = config.get("pages") or DEFAULT_PAGES
    for page in pages:
        if page.get("enabled", True):
            yield page
        else:
            LOGGER.debug("Skipping disabled page %s", page.get("name"))
