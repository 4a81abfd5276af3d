"""Sieve facade.

Ties a dialect, a configuration and a comparator together. Every entry point
takes plain strings; parsing failures propagate as InvalidVersionError or
InvalidRangeError and are never reported as "no match".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .comparator import SemverComparator, VersionComparator
from .config import SieveConfiguration
from .dialects import DEFAULT_DIALECT_ID, DialectProtocol, get_dialect
from .evaluator import RangeEvaluator
from .models import MatchReport, ParsedRange, ParsedVersion

logger = logging.getLogger(__name__)


class Sieve:
    """Match version strings against range strings in one dialect."""

    def __init__(
        self,
        dialect: DialectProtocol | str | None = None,
        configuration: SieveConfiguration | None = None,
        comparator: VersionComparator | None = None,
    ) -> None:
        if dialect is None or isinstance(dialect, str):
            dialect = get_dialect(dialect or DEFAULT_DIALECT_ID)
        self._dialect = dialect
        self._configuration = dialect.resolve_configuration(configuration)
        self._comparator = comparator or SemverComparator()
        self._evaluator = RangeEvaluator(self._comparator, self._configuration)

    def __repr__(self) -> str:
        return f"Sieve(dialect={self._dialect.name!r})"

    @property
    def dialect(self) -> DialectProtocol:
        return self._dialect

    @property
    def configuration(self) -> SieveConfiguration:
        """The caller's configuration with the dialect overrides applied."""
        return self._configuration

    @property
    def comparator(self) -> VersionComparator:
        return self._comparator

    @property
    def evaluator(self) -> RangeEvaluator:
        return self._evaluator

    def parse_version(self, version: str) -> ParsedVersion:
        return self._dialect.parse_version(version, self._configuration)

    def parse_range(self, range_text: str) -> ParsedRange:
        return self._dialect.parse_range(range_text, self._configuration)

    def includes(self, version: str, ranges: Sequence[str]) -> bool:
        """Return True when ``version`` satisfies at least one of ``ranges``."""
        return self.match(version, ranges).matched

    def match(self, version: str, ranges: Sequence[str]) -> MatchReport:
        """Evaluate ``version`` against every range.

        The version is parsed once. Each range is parsed on its own; the first
        range that fails to parse aborts the whole call.
        """
        parsed_version = self.parse_version(version)

        matched_ranges: list[str] = []
        normalized_ranges: list[str] = []
        for range_text in ranges:
            parsed_range = self.parse_range(range_text)
            normalized_ranges.append(parsed_range.to_normalized_string())
            if self._evaluator.satisfies(parsed_version, parsed_range):
                matched_ranges.append(range_text)

        report = MatchReport(
            matched=bool(matched_ranges),
            matched_ranges=tuple(matched_ranges),
            normalized_ranges=tuple(normalized_ranges),
        )
        logger.debug(
            "%s: %r matched %d of %d ranges",
            self._dialect.name,
            version,
            len(matched_ranges),
            len(normalized_ranges),
        )
        return report

    def filter(self, versions: Iterable[str], range_text: str) -> list[str]:
        """Return the versions satisfying ``range_text``, in input order."""
        parsed_range = self.parse_range(range_text)
        return [
            version
            for version in versions
            if self._evaluator.satisfies(self.parse_version(version), parsed_range)
        ]

    def max_satisfying(self, versions: Iterable[str], range_text: str) -> str | None:
        return self._pick(versions, range_text, highest=True)

    def min_satisfying(self, versions: Iterable[str], range_text: str) -> str | None:
        return self._pick(versions, range_text, highest=False)

    def _pick(self, versions: Iterable[str], range_text: str, highest: bool) -> str | None:
        parsed_range = self.parse_range(range_text)
        candidates = {}
        for version in versions:
            parsed = self.parse_version(version)
            # Keep the first spelling of equal versions.
            candidates.setdefault(parsed, version)
        if highest:
            best = self._evaluator.get_highest_satisfying(candidates, parsed_range)
        else:
            best = self._evaluator.get_lowest_satisfying(candidates, parsed_range)
        return None if best is None else candidates[best]
