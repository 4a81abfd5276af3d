"""Match version strings against range expressions across package ecosystems.

Module-level helpers use a ``Sieve`` for the requested dialect:

    >>> from semver_sieve import includes
    >>> includes("1.5.0", [">=1.0 <2.0"])
    True
"""

from __future__ import annotations

from collections.abc import Sequence

from .comparator import SemverComparator, VersionComparator
from .config import SieveConfiguration, load_configuration
from .core import Sieve
from .dialects import (
    Dialect,
    DialectProtocol,
    UnknownDialectError,
    get_dialect,
    get_known_dialect_ids,
)
from .errors import (
    ConfigurationError,
    InvalidRangeError,
    InvalidVersionError,
    SemverSieveError,
)
from .evaluator import RangeEvaluator
from .models import MatchReport, ParsedRange, ParsedVersion, RangeLogic, VersionConstraint
from .parsers import RangeParser, VersionParser

__version__ = "0.1.0"


def parse_version(
    version: str,
    configuration: SieveConfiguration | None = None,
    dialect: DialectProtocol | str | None = None,
) -> ParsedVersion:
    return Sieve(dialect, configuration).parse_version(version)


def parse_range(
    range_text: str,
    configuration: SieveConfiguration | None = None,
    dialect: DialectProtocol | str | None = None,
) -> ParsedRange:
    return Sieve(dialect, configuration).parse_range(range_text)


def compare(
    a: ParsedVersion | str,
    b: ParsedVersion | str,
    configuration: SieveConfiguration | None = None,
) -> int:
    """Return -1, 0 or 1 comparing two versions.

    Parsed versions are compared as given; strings are parsed as generic SemVer.
    """
    sieve = Sieve(configuration=configuration)
    if isinstance(a, str):
        a = sieve.parse_version(a)
    if isinstance(b, str):
        b = sieve.parse_version(b)
    return sieve.comparator.compare(a, b)


def satisfies(
    version: ParsedVersion | str,
    version_range: ParsedRange | str,
    configuration: SieveConfiguration | None = None,
    dialect: DialectProtocol | str | None = None,
) -> bool:
    """Return True when ``version`` satisfies ``version_range``.

    Strings are parsed with ``dialect``; the prerelease gate uses the resolved
    configuration either way.
    """
    sieve = Sieve(dialect, configuration)
    if isinstance(version, str):
        version = sieve.parse_version(version)
    if isinstance(version_range, str):
        version_range = sieve.parse_range(version_range)
    return sieve.evaluator.satisfies(version, version_range)


def includes(
    version: str,
    ranges: Sequence[str],
    configuration: SieveConfiguration | None = None,
    dialect: DialectProtocol | str | None = None,
) -> bool:
    return Sieve(dialect, configuration).includes(version, ranges)


def match(
    version: str,
    ranges: Sequence[str],
    configuration: SieveConfiguration | None = None,
    dialect: DialectProtocol | str | None = None,
) -> MatchReport:
    return Sieve(dialect, configuration).match(version, ranges)


__all__ = [
    "ConfigurationError",
    "Dialect",
    "DialectProtocol",
    "InvalidRangeError",
    "InvalidVersionError",
    "MatchReport",
    "ParsedRange",
    "ParsedVersion",
    "RangeEvaluator",
    "RangeLogic",
    "RangeParser",
    "SemverComparator",
    "SemverSieveError",
    "Sieve",
    "SieveConfiguration",
    "UnknownDialectError",
    "VersionComparator",
    "VersionConstraint",
    "VersionParser",
    "compare",
    "get_dialect",
    "get_known_dialect_ids",
    "includes",
    "load_configuration",
    "match",
    "parse_range",
    "parse_version",
    "satisfies",
]
