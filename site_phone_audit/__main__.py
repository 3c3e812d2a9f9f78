"""Run the phone audit against a site with ``python -m site_phone_audit``.

The process exits with the audit outcome: 0 when the site and the CSV agree,
1 on mismatches, 2 on setup failures and 3 when a page cannot be reached.
"""
from __future__ import annotations

import sys

from . import cli


def main(argv: list[str] | None = None) -> int:
    """Audit the site, or list the options and exit codes when given no arguments.

    A bare invocation cannot name an expected-numbers file, so it counts as a
    setup failure after the help text is printed.
    """

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser = cli.build_parser(prog="python -m site_phone_audit")
        parser.print_help()
        return cli.EXIT_SETUP

    return cli.main(argv)


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
