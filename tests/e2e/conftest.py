from __future__ import annotations

import os
from pathlib import Path

import pytest

from site_phone_audit.browser import BrowserConfig
from site_phone_audit.config import load_configuration
from site_phone_audit.factory import build_browser_config, build_page_targets
from site_phone_audit.ingestion import ExpectedPhones, ensure_expected_phones


@pytest.fixture(scope="session")
def audit_config() -> dict:
    value = os.environ.get("PHONE_AUDIT_CONFIG")
    return load_configuration(value) if value else {}


@pytest.fixture(scope="session")
def site_config(audit_config: dict) -> BrowserConfig:
    config = build_browser_config(audit_config)
    if not config.base_url:
        pytest.skip("PHONE_AUDIT_BASE_URL environment variable not set for e2e tests.")
    return config


@pytest.fixture(scope="session")
def expected_phones(audit_config: dict) -> ExpectedPhones:
    """Expected phone numbers, loaded once and shared read-only by every test.

    A missing or empty file raises ``SetupError`` here, so no test that needs the
    list ever opens a page.
    """

    path = os.environ.get("PHONE_AUDIT_EXPECTED_CSV") or audit_config.get("expected_csv") or "expected-numbers.csv"
    return ensure_expected_phones(Path(path))


@pytest.fixture(scope="session")
def page_targets(audit_config: dict):
    return build_page_targets(audit_config)
