"""
Unit tests for range evaluation and the prerelease gate.
"""

import pytest

from semver_sieve.config import SieveConfiguration
from semver_sieve.evaluator import RangeEvaluator
from semver_sieve.models import ParsedRange


@pytest.fixture
def evaluator():
    return RangeEvaluator()


@pytest.fixture
def permissive():
    return RangeEvaluator(configuration=SieveConfiguration().with_prereleases(True))


class TestPrereleaseGate:
    """Tests for when prerelease versions may satisfy a range."""

    def test_prerelease_rejected_by_upper_bound_only_range(self, evaluator, parse, range_parser):
        """Test that <2.0.0 does not admit 1.5.0-beta by default."""
        assert not evaluator.satisfies(parse("1.5.0-beta"), range_parser.parse("<2.0.0"))

    def test_configuration_opens_the_gate(self, permissive, parse, range_parser):
        """Test include_prereleases."""
        assert permissive.satisfies(parse("1.5.0-beta"), range_parser.parse("<2.0.0"))

    def test_lower_bound_opens_the_gate(self, evaluator, parse, range_parser):
        """Test that a >= constraint lets prereleases through."""
        assert evaluator.satisfies(parse("1.0.0-alpha"), range_parser.parse(">=0.9.0"))

    def test_prerelease_still_compared(self, evaluator, parse, range_parser):
        """Test that 1.0.0-alpha does not satisfy >=1.0.0."""
        assert not evaluator.satisfies(parse("1.0.0-alpha"), range_parser.parse(">=1.0.0"))

    def test_prerelease_target_on_same_core(self, evaluator, parse, range_parser):
        """Test that a prerelease target admits prereleases of its core."""
        assert evaluator.satisfies(parse("1.2.3-beta"), range_parser.parse("<1.2.3-rc.1"))

    def test_exact_prerelease(self, evaluator, parse, range_parser):
        """Test equality against a prerelease target."""
        assert evaluator.satisfies(parse("1.2.3-rc.1"), range_parser.parse("1.2.3-rc.1"))
        assert not evaluator.satisfies(parse("1.2.3-rc.2"), range_parser.parse("1.2.3-rc.1"))

    def test_match_anything_admits_prereleases(self, evaluator, parse):
        """Test that an empty range matches prereleases too."""
        assert evaluator.satisfies(parse("0.1.0-alpha"), ParsedRange.any())

    def test_releases_are_not_gated(self, evaluator, parse, range_parser):
        """Test that release versions go straight to the comparator."""
        assert evaluator.satisfies(parse("1.5.0"), range_parser.parse("<2.0.0"))


class TestCollections:
    """Tests for helpers over several versions or ranges."""

    VERSIONS = ["1.0.0", "1.2.0", "1.5.3", "2.0.0", "2.1.0-beta"]

    def test_find_satisfying_ranges(self, evaluator, parse, range_parser):
        """Test that only satisfied ranges are returned, in order."""
        ranges = [range_parser.parse(text) for text in ("^1.0", "^2.0", ">=1.5 <3")]
        result = evaluator.find_satisfying_ranges(parse("1.5.3"), ranges)
        assert [r.raw for r in result] == ["^1.0", ">=1.5 <3"]

    def test_any_satisfies(self, evaluator, parse, range_parser):
        """Test any_satisfies."""
        versions = [parse(v) for v in self.VERSIONS]
        assert evaluator.any_satisfies(versions, range_parser.parse("^2.0"))
        assert not evaluator.any_satisfies(versions, range_parser.parse("^3.0"))

    def test_filter_satisfying(self, evaluator, parse, range_parser):
        """Test that filtering keeps input order."""
        versions = [parse(v) for v in self.VERSIONS]
        result = evaluator.filter_satisfying(versions, range_parser.parse("^1.0"))
        assert [v.raw for v in result] == ["1.0.0", "1.2.0", "1.5.3"]

    def test_highest_and_lowest(self, evaluator, parse, range_parser):
        """Test the highest and lowest satisfying versions."""
        versions = [parse(v) for v in ["1.2.0", "1.5.3", "1.0.0", "2.0.0"]]
        version_range = range_parser.parse("^1.0")
        assert evaluator.get_highest_satisfying(versions, version_range).raw == "1.5.3"
        assert evaluator.get_lowest_satisfying(versions, version_range).raw == "1.0.0"

    def test_no_satisfying_version(self, evaluator, parse, range_parser):
        """Test that None is returned when nothing matches."""
        versions = [parse("1.0.0")]
        assert evaluator.get_highest_satisfying(versions, range_parser.parse("^2.0")) is None
        assert evaluator.get_lowest_satisfying([], range_parser.parse("^2.0")) is None

    def test_first_occurrence_wins_on_ties(self, evaluator, parse, range_parser):
        """Test that equal versions resolve to the first one seen."""
        versions = [parse("1.0.0+first"), parse("1.0.0+second")]
        version_range = range_parser.parse("^1.0")
        assert evaluator.get_highest_satisfying(versions, version_range).build == ("first",)
        assert evaluator.get_lowest_satisfying(versions, version_range).build == ("first",)
