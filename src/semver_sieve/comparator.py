"""SemVer 2.0.0 precedence and constraint checks.

1. major, minor and patch compare numerically
2. a prerelease has lower precedence than the release of the same core
3. prerelease identifiers compare numerically or lexically, field by field
4. build metadata is ignored
"""

from __future__ import annotations

from typing import Any, Protocol

from .models import ParsedRange, ParsedVersion, RangeLogic, VersionConstraint


class VersionComparator(Protocol):
    """Contract for comparators injected into the evaluator and facade."""

    def compare(self, a: ParsedVersion, b: ParsedVersion) -> int: ...

    def satisfies(self, version: ParsedVersion, version_range: ParsedRange) -> bool: ...

    def greater_than(self, a: ParsedVersion, b: ParsedVersion) -> bool: ...

    def less_than(self, a: ParsedVersion, b: ParsedVersion) -> bool: ...


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_identifier(a: str, b: str) -> int:
    a_numeric = a.isdigit()
    b_numeric = b.isdigit()
    if a_numeric and b_numeric:
        return _cmp(int(a), int(b))
    if a_numeric:
        return -1
    if b_numeric:
        return 1
    return _cmp(a, b)


class SemverComparator:
    """Stateless comparator implementing SemVer precedence."""

    def compare(self, a: ParsedVersion, b: ParsedVersion) -> int:
        """Return -1, 0 or 1 as ``a`` is lower than, equal to or greater than ``b``."""
        core = _cmp(a.core_version, b.core_version)
        if core:
            return core
        return self._compare_prerelease(a.prerelease, b.prerelease)

    def greater_than(self, a: ParsedVersion, b: ParsedVersion) -> bool:
        return self.compare(a, b) > 0

    def greater_than_or_equal(self, a: ParsedVersion, b: ParsedVersion) -> bool:
        return self.compare(a, b) >= 0

    def less_than(self, a: ParsedVersion, b: ParsedVersion) -> bool:
        return self.compare(a, b) < 0

    def less_than_or_equal(self, a: ParsedVersion, b: ParsedVersion) -> bool:
        return self.compare(a, b) <= 0

    def equal(self, a: ParsedVersion, b: ParsedVersion) -> bool:
        return self.compare(a, b) == 0

    def satisfies(self, version: ParsedVersion, version_range: ParsedRange) -> bool:
        """Check ``version`` against every group of ``version_range``.

        No prerelease policy is applied here; see RangeEvaluator.
        """
        if not version_range.has_constraints:
            return True

        if version_range.logic is RangeLogic.AND:
            return all(self.satisfies_constraint(version, c) for c in version_range.constraints)

        for group in version_range.groups:
            if all(self.satisfies_constraint(version, c) for c in group):
                return True
        return False

    def satisfies_constraint(self, version: ParsedVersion, constraint: VersionConstraint) -> bool:
        comparison = self._compare_to_target(version, constraint)
        operator = constraint.operator
        if operator == "<":
            return comparison < 0
        if operator == "<=":
            return comparison <= 0
        if operator == ">":
            return comparison > 0
        if operator == ">=":
            return comparison >= 0
        if operator == "=":
            return comparison == 0
        return comparison != 0

    def _compare_to_target(self, version: ParsedVersion, constraint: VersionConstraint) -> int:
        target = constraint.version
        if not constraint.exclusive_floor:
            return self.compare(version, target)
        if version.core_version != target.core_version:
            return _cmp(version.core_version, target.core_version)
        # Same core: only the "-0" prerelease itself sits on the floor.
        return 0 if version.prerelease == ("0",) else 1

    def _compare_prerelease(self, a: tuple[str, ...], b: tuple[str, ...]) -> int:
        if not a and not b:
            return 0
        if not a:
            return 1
        if not b:
            return -1

        for left, right in zip(a, b):
            comparison = _compare_identifier(left, right)
            if comparison:
                return comparison
        return _cmp(len(a), len(b))
