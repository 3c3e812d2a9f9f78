"""Command line interface for auditing the phone numbers shown on a site."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict

from .browser import NavigationError, SiteSession
from .config import ConfigurationError, load_configuration
from .factory import build_browser_config, build_page_targets
from .ingestion import SetupError, ensure_expected_phones
from .models import pages_label
from .orchestrator import PhoneAuditOrchestrator

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_SETUP = 2
EXIT_NAVIGATION = 3

EXIT_CODES_HELP = """exit codes:
  0  every expected number was found and every shown number was expected
  1  reconciliation found unexpected or missing phone numbers
  2  setup failed: bad configuration, missing base URL, or unusable CSV
  3  a configured page could not be reached
"""


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Check that the phone numbers shown on a site match a CSV of expected numbers",
        epilog=EXIT_CODES_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "expected",
        nargs="?",
        help="Path to the CSV file with a 'phone' column (defaults to 'expected_csv' from the config)",
    )
    parser.add_argument("--base-url", help="Root URL of the audited site (or PHONE_AUDIT_BASE_URL)")
    parser.add_argument(
        "--config",
        help="Path to the audit configuration file (YAML or JSON) listing pages and selectors",
    )
    parser.add_argument("--headed", action="store_true", help="Run Chromium with a visible window")
    parser.add_argument(
        "--selector-timeout",
        type=float,
        default=None,
        help="Seconds to wait for each selector to attach (default: 5)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        config: Dict[str, Any] = load_configuration(args.config) if args.config else {}
        targets = build_page_targets(config)
        browser_config = build_browser_config(
            config,
            base_url=args.base_url,
            headless=False if args.headed else None,
            selector_timeout=args.selector_timeout,
        )
        expected_path = args.expected or config.get("expected_csv")
        if not expected_path:
            raise SetupError("No expected phone numbers file given")
        expected = ensure_expected_phones(expected_path)
    except (ConfigurationError, SetupError) as exc:
        logging.error("%s", exc)
        return EXIT_SETUP

    if not browser_config.base_url:
        logging.error("No base URL given. Use --base-url or set PHONE_AUDIT_BASE_URL.")
        return EXIT_SETUP

    try:
        with SiteSession(browser_config) as session:
            report = PhoneAuditOrchestrator(session, targets).run(expected)
    except NavigationError as exc:
        logging.error("%s", exc)
        return EXIT_NAVIGATION

    for observed in report.observed:
        logging.info("Observed %s on %s", observed.phone, pages_label(observed.pages))
    for mismatch in report.mismatches:
        logging.error("%s", mismatch.message())

    if not report.ok:
        logging.error("Phone reconciliation failed: %s", report.summary())
        return EXIT_MISMATCH
    logging.info("All %s expected phone numbers were found on %s", len(expected), browser_config.base_url)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
