"""CLI helper to try extraction selectors against a single page."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from site_phone_audit import PageExtraction, PageTarget  # noqa: E402  (import after path fix)
from site_phone_audit.browser import BrowserConfig, SiteSession  # noqa: E402

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the phone numbers a set of selectors finds on one page.")
    parser.add_argument("url", help="Page to open")
    parser.add_argument(
        "selectors",
        nargs="*",
        default=['a[href^="tel:"]'],
        help="CSS selectors to try, in order",
    )
    parser.add_argument("--headless", dest="headless", action="store_true", help="Run Chromium in headless mode")
    parser.add_argument(
        "--no-headless",
        dest="headless",
        action="store_false",
        help="Run Chromium with a visible window",
    )
    parser.set_defaults(headless=True)
    parser.add_argument("--timeout", type=float, default=5.0, help="Seconds to wait for each selector")
    parser.add_argument(
        "--output-json",
        type=Path,
        help="Optional path to save the extraction as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Console log level",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level))


def run_extraction(args: argparse.Namespace) -> None:
    configure_logging(args.log_level)

    config = BrowserConfig(headless=args.headless, selector_timeout=args.timeout)
    target = PageTarget(name=args.url, path=args.url, selectors=list(args.selectors))

    with SiteSession(config) as session:
        extraction = session.visit(target)

    pretty_print_extraction(extraction)

    if args.output_json:
        payload = asdict(extraction)
        payload["phones"] = extraction.sorted_phones()
        args.output_json.write_text(json.dumps(payload, indent=2))
        LOGGER.info("Wrote extraction JSON to %s", args.output_json)


def pretty_print_extraction(extraction: PageExtraction) -> None:
    print(f"Page: {extraction.url or extraction.page}")

    if not extraction.phones:
        print("No phone numbers found.")
    else:
        print("Phone Numbers:")
        for phone in extraction.sorted_phones():
            raw = extraction.raw_text.get(phone, "")
            raw_text = f" ({raw!r})" if raw and raw != phone else ""
            print(f"  - {phone}{raw_text}")

    if extraction.missed_selectors:
        print("Selectors not found:")
        for selector in extraction.missed_selectors:
            print(f"  - {selector}")


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv or sys.argv[1:])
    try:
        run_extraction(args)
    except Exception as exc:  # pragma: no cover - CLI convenience
        LOGGER.exception("Extraction failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
