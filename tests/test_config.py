"""Tests for configuration loading and the factory helpers built on it."""
from __future__ import annotations

import json

import pytest

from site_phone_audit.config import DEFAULT_PAGES, ConfigurationError, load_configuration
from site_phone_audit.factory import build_browser_config, build_page_targets


def test_load_configuration_reads_yaml(tmp_path) -> None:
    config_path = tmp_path / "audit.yaml"
    config_path.write_text(
        "expected_csv: expected-numbers.csv\n"
        "browser:\n"
        "  base_url: https://www.example.com/\n"
        "pages:\n"
        "  - name: homepage\n"
        "    path: /\n"
        "    selectors: ['a[href^=\"tel:\"]']\n",
        encoding="utf-8",
    )

    config = load_configuration(config_path)

    assert config["expected_csv"] == "expected-numbers.csv"
    assert config["pages"][0]["selectors"] == ['a[href^="tel:"]']


def test_load_configuration_rejects_missing_and_unsupported_files(tmp_path) -> None:
    with pytest.raises(ConfigurationError, match="was not found"):
        load_configuration(tmp_path / "absent.json")

    ini_path = tmp_path / "audit.ini"
    ini_path.write_text("[audit]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Unsupported configuration format"):
        load_configuration(ini_path)


def test_load_configuration_rejects_malformed_json(tmp_path) -> None:
    config_path = tmp_path / "audit.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="malformed"):
        load_configuration(config_path)


def test_build_page_targets_defaults_to_homepage_and_contact_page() -> None:
    targets = build_page_targets({})

    assert [target.name for target in targets] == [page["name"] for page in DEFAULT_PAGES]
    assert targets[0].path == "/"
    assert targets[0].selectors == ['a[href^="tel:"]']
    assert targets[1].link_name == "Contact Us Contact Us"
    assert targets[1].url_pattern == "contact-us"


def test_build_page_targets_skips_disabled_pages(tmp_path) -> None:
    config_path = tmp_path / "audit.json"
    config_path.write_text(
        json.dumps(
            {
                "pages": [
                    {"name": "homepage", "path": "/", "selectors": "a.tel"},
                    {"name": "careers", "path": "/career/", "selectors": ["span.phone"], "enabled": False},
                ]
            }
        ),
        encoding="utf-8",
    )

    targets = build_page_targets(load_configuration(config_path))

    assert [target.name for target in targets] == ["homepage"]
    assert targets[0].selectors == ["a.tel"]


def test_build_page_targets_requires_selectors_and_a_location() -> None:
    with pytest.raises(ConfigurationError, match="selector"):
        build_page_targets({"pages": [{"name": "homepage", "path": "/"}]})

    with pytest.raises(ConfigurationError, match="path or a link"):
        build_page_targets({"pages": [{"name": "homepage", "selectors": ["a.tel"]}]})


def test_build_browser_config_merges_environment_file_and_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PHONE_AUDIT_BASE_URL", "https://env.example.com/")
    monkeypatch.setenv("PHONE_AUDIT_HEADLESS", "false")

    config = build_browser_config(
        {"browser": {"selector_timeout": 2, "cookie_accept_button": "Got It"}},
        selector_timeout=None,
        base_url="https://cli.example.com/",
    )

    assert config.base_url == "https://cli.example.com/"
    assert config.headless is False
    assert config.selector_timeout_ms == 2000
    assert config.cookie_accept_button == "Got It"


def test_build_browser_config_rejects_unknown_options() -> None:
    with pytest.raises(ConfigurationError, match="Unknown browser options"):
        build_browser_config({"browser": {"retries": 3}})
