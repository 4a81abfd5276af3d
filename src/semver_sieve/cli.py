"""CLI entrypoint for matching a version against one or more ranges.

Usage:
  semver-sieve 1.5.0 "^1.0" ">=2.0" [--dialect npm] [--config sieve.json]

Prints the match report as JSON. Exits 0 when a range matched, 1 when none
did and 2 when the input or configuration is invalid.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_configuration
from .core import Sieve
from .dialects import DEFAULT_DIALECT_ID, get_known_dialect_ids
from .errors import ConfigurationError, SemverSieveError

EXIT_MATCHED = 0
EXIT_NOT_MATCHED = 1
EXIT_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="semver-sieve",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("version", help="Version string to test")
    parser.add_argument("ranges", nargs="+", metavar="range", help="Range expressions")
    parser.add_argument(
        "--dialect",
        default=DEFAULT_DIALECT_ID,
        choices=get_known_dialect_ids(),
        help=f"Ecosystem syntax for the version and ranges (default: {DEFAULT_DIALECT_ID})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON configuration file (default: $SEMVER_SIEVE_CONFIG)",
    )
    parser.add_argument(
        "--include-prereleases",
        action="store_true",
        help="Let prerelease versions satisfy any range",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Require MAJOR.MINOR.PATCH versions",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        configuration = load_configuration(args.config)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.include_prereleases:
        configuration = configuration.with_prereleases(True)
    if args.strict:
        configuration = configuration.with_strictness(True)

    try:
        report = Sieve(args.dialect, configuration).match(args.version, args.ranges)
    except SemverSieveError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(report.to_dict(), indent=2))
    return EXIT_MATCHED if report.matched else EXIT_NOT_MATCHED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
