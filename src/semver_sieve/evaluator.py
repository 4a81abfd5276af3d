"""Range evaluation with prerelease handling."""

from __future__ import annotations

from collections.abc import Iterable

from .comparator import SemverComparator, VersionComparator
from .config import SieveConfiguration
from .models import ParsedRange, ParsedVersion


def _same_core(a: ParsedVersion, b: ParsedVersion) -> bool:
    return a.core_version == b.core_version


class RangeEvaluator:
    """Decide whether versions satisfy ranges.

    A prerelease version only takes part in a range when the configuration
    includes prereleases, the range allows them, or one of its constraints
    targets a prerelease of the same major.minor.patch.
    """

    def __init__(
        self,
        comparator: VersionComparator | None = None,
        configuration: SieveConfiguration | None = None,
    ) -> None:
        self._comparator = comparator or SemverComparator()
        self._configuration = configuration or SieveConfiguration.default()

    @property
    def comparator(self) -> VersionComparator:
        return self._comparator

    @property
    def configuration(self) -> SieveConfiguration:
        return self._configuration

    def satisfies(self, version: ParsedVersion, version_range: ParsedRange) -> bool:
        if not version_range.has_constraints:
            return True

        if version.is_prerelease and not self._should_include_prerelease(version, version_range):
            return False

        return self._comparator.satisfies(version, version_range)

    def find_satisfying_ranges(
        self, version: ParsedVersion, ranges: Iterable[ParsedRange]
    ) -> list[ParsedRange]:
        return [r for r in ranges if self.satisfies(version, r)]

    def any_satisfies(self, versions: Iterable[ParsedVersion], version_range: ParsedRange) -> bool:
        return any(self.satisfies(v, version_range) for v in versions)

    def filter_satisfying(
        self, versions: Iterable[ParsedVersion], version_range: ParsedRange
    ) -> list[ParsedVersion]:
        return [v for v in versions if self.satisfies(v, version_range)]

    def get_highest_satisfying(
        self, versions: Iterable[ParsedVersion], version_range: ParsedRange
    ) -> ParsedVersion | None:
        """Return the highest satisfying version; the first one wins on ties."""
        highest: ParsedVersion | None = None
        for version in self.filter_satisfying(versions, version_range):
            if highest is None or self._comparator.greater_than(version, highest):
                highest = version
        return highest

    def get_lowest_satisfying(
        self, versions: Iterable[ParsedVersion], version_range: ParsedRange
    ) -> ParsedVersion | None:
        """Return the lowest satisfying version; the first one wins on ties."""
        lowest: ParsedVersion | None = None
        for version in self.filter_satisfying(versions, version_range):
            if lowest is None or self._comparator.less_than(version, lowest):
                lowest = version
        return lowest

    def _should_include_prerelease(
        self, version: ParsedVersion, version_range: ParsedRange
    ) -> bool:
        if self._configuration.include_prereleases:
            return True

        if version_range.allows_prereleases():
            return True

        # Same major.minor.patch only; prerelease identifiers are not compared.
        return any(
            c.targets_prerelease and _same_core(version, c.version)
            for c in version_range.constraints
        )
