"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json
import logging

import pytest

from site_phone_audit import __main__, cli
from site_phone_audit.browser import NavigationError
from site_phone_audit.cli import main
from site_phone_audit.models import PageExtraction


class FakeSiteSession:
    """Stands in for the Playwright session, serving canned extractions per page."""

    phones = {"homepage": ["+15550001111"], "contact page": ["+442079460958"]}
    instances: list = []
    unreachable: set = set()

    def __init__(self, config) -> None:
        self.config = config
        self.visited: list = []
        FakeSiteSession.instances.append(self)

    def __enter__(self) -> "FakeSiteSession":
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        return None

    def visit(self, target) -> PageExtraction:
        self.visited.append(target.name)
        if target.name in self.unreachable:
            raise NavigationError(f"Unable to reach {target.name}: net::ERR_NAME_NOT_RESOLVED")
        return PageExtraction(page=target.name, phones=frozenset(self.phones.get(target.name, [])))


@pytest.fixture(autouse=True)
def fake_session(monkeypatch):
    FakeSiteSession.instances = []
    FakeSiteSession.unreachable = set()
    monkeypatch.setattr(cli, "SiteSession", FakeSiteSession)
    monkeypatch.delenv("PHONE_AUDIT_BASE_URL", raising=False)
    return FakeSiteSession


@pytest.fixture()
def expected_csv(tmp_path):
    path = tmp_path / "expected-numbers.csv"
    path.write_text("country,phone\nUS,+1 555 000 1111\nUK,+44 20 7946 0958\n", encoding="utf-8")
    return path


def test_cli_smoke_reconciles_default_pages(expected_csv) -> None:
    exit_code = main([str(expected_csv), "--base-url", "https://www.example.com/"])

    assert exit_code == cli.EXIT_OK
    session = FakeSiteSession.instances[0]
    assert session.visited == ["homepage", "contact page"]
    assert session.config.base_url == "https://www.example.com/"
    assert session.config.headless is True


def test_cli_reports_mismatches_with_non_zero_exit(expected_csv, caplog) -> None:
    FakeSiteSession.phones = {"homepage": ["+15550001111", "+33123456789"]}
    try:
        with caplog.at_level(logging.ERROR):
            exit_code = main([str(expected_csv), "--base-url", "https://www.example.com/"])
    finally:
        FakeSiteSession.phones = {"homepage": ["+15550001111"], "contact page": ["+442079460958"]}

    assert exit_code == cli.EXIT_MISMATCH
    assert '"+33123456789" from homepage' in caplog.text
    assert '"+442079460958"' in caplog.text


def test_cli_uses_pages_and_csv_from_config(tmp_path, expected_csv) -> None:
    config_path = tmp_path / "audit.json"
    config_path.write_text(
        json.dumps(
            {
                "expected_csv": str(expected_csv),
                "browser": {"base_url": "https://www.example.com/"},
                "pages": [
                    {"name": "homepage", "path": "/", "selectors": ["a.tel"]},
                    {"name": "contact page", "path": "/contact-us/", "selectors": ["span.phone"]},
                ],
            }
        ),
        encoding="utf-8",
    )

    exit_code = main(["--config", str(config_path), "--headed", "--selector-timeout", "2"])

    assert exit_code == cli.EXIT_OK
    session = FakeSiteSession.instances[0]
    assert session.config.headless is False
    assert session.config.selector_timeout == 2


def test_cli_aborts_before_browsing_when_csv_missing(tmp_path) -> None:
    exit_code = main([str(tmp_path / "absent.csv"), "--base-url", "https://www.example.com/"])

    assert exit_code == cli.EXIT_SETUP
    assert FakeSiteSession.instances == []


def test_cli_aborts_before_browsing_when_csv_empty(tmp_path) -> None:
    empty = tmp_path / "expected-numbers.csv"
    empty.write_text("country,phone\n", encoding="utf-8")

    exit_code = main([str(empty), "--base-url", "https://www.example.com/"])

    assert exit_code == cli.EXIT_SETUP
    assert FakeSiteSession.instances == []


def test_cli_aborts_before_browsing_when_csv_not_utf8(tmp_path) -> None:
    latin1 = tmp_path / "expected-numbers.csv"
    latin1.write_bytes("country,phone\nCôte,+225 01 02\n".encode("latin-1"))

    exit_code = main([str(latin1), "--base-url", "https://www.example.com/"])

    assert exit_code == cli.EXIT_SETUP
    assert FakeSiteSession.instances == []


def test_cli_reports_unreachable_page_apart_from_mismatches(expected_csv, caplog) -> None:
    FakeSiteSession.unreachable = {"contact page"}

    with caplog.at_level(logging.ERROR):
        exit_code = main([str(expected_csv), "--base-url", "https://www.example.com/"])

    assert exit_code == cli.EXIT_NAVIGATION
    assert exit_code != cli.EXIT_MISMATCH
    assert "Unable to reach contact page" in caplog.text
    assert "Phone reconciliation failed" not in caplog.text


def test_cli_requires_base_url(expected_csv) -> None:
    assert main([str(expected_csv)]) == cli.EXIT_SETUP
    assert FakeSiteSession.instances == []


def test_module_entry_point_delegates_to_cli(expected_csv) -> None:
    """The package entry point should behave like the CLI."""

    exit_code = __main__.main([str(expected_csv), "--base-url", "https://www.example.com/"])

    assert exit_code == cli.EXIT_OK


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m site_phone_audit" in captured.out
    assert "3  a configured page could not be reached" in captured.out
    assert exit_code == cli.EXIT_SETUP
