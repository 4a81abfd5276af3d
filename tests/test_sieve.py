"""
Tests for the Sieve facade and the module-level helpers.
"""

import pytest

import semver_sieve
from semver_sieve import Sieve
from semver_sieve.config import SieveConfiguration
from semver_sieve.dialects import NpmDialect, UnknownDialectError
from semver_sieve.errors import InvalidRangeError, InvalidVersionError
from semver_sieve.models import MatchReport


@pytest.fixture
def sieve():
    return Sieve()


class TestIncludes:
    """Tests for the boolean entry point."""

    @pytest.mark.parametrize(
        "version,ranges,expected",
        [
            ("1.2.3", ["1.2.3"], True),
            ("1.2.3", ["1.2.4"], False),
            ("1.2.4", ["^1.2.3"], True),
            ("2.0.0", ["^1.2.3"], False),
            ("1.3.0", ["~1.2.3"], False),
            ("1.2.4", ["~1.2.3"], True),
            ("1.0.0", ["^1.0 || ^2.0"], True),
            ("2.0.0", ["^1.0 || ^2.0"], True),
            ("3.0.0", ["^1.0 || ^2.0"], False),
            ("3.0.0", ["^1.0", "^3.0"], True),
            ("1.0.0", [], False),
        ],
    )
    def test_includes(self, sieve, version, ranges, expected):
        """Test the concrete matching scenarios."""
        assert sieve.includes(version, ranges) is expected

    def test_prerelease_default(self, sieve):
        """Test that 1.0.0-alpha does not satisfy >=1.0.0."""
        assert not sieve.includes("1.0.0-alpha", [">=1.0.0"])

    def test_prerelease_with_inclusion_enabled(self):
        """Test prerelease inclusion through the configuration."""
        sieve = Sieve(configuration=SieveConfiguration().with_prereleases(True))
        assert sieve.includes("1.0.0-alpha", [">=0.9.0"])
        assert sieve.includes("1.5.0-beta", ["<2.0.0"])

    def test_prerelease_gate_uses_configuration(self, sieve):
        """Test that the default configuration keeps the gate closed."""
        assert not sieve.includes("1.5.0-beta", ["<2.0.0"])


class TestMatch:
    """Tests for the structured match report."""

    def test_report(self, sieve):
        """Test matched, matched ranges and normalized ranges."""
        report = sieve.match("1.5.0", ["^1.0", "^2.0", "1.x"])
        assert isinstance(report, MatchReport)
        assert report.matched
        assert report.matched_ranges == ("^1.0", "1.x")
        assert report.normalized_ranges == (
            ">=1.0.0 <2.0.0-0",
            ">=2.0.0 <3.0.0-0",
            ">=1.0.0 <2.0.0-0",
        )

    def test_no_match(self, sieve):
        """Test a report without matches."""
        report = sieve.match("3.0.0", ["^1.0"])
        assert not report
        assert report.matched_ranges == ()
        assert report.normalized_ranges == (">=1.0.0 <2.0.0-0",)

    def test_prerelease_between_ranges(self, sieve):
        """Test 2.0.0-beta.2 against ^2.0 and >=1.9 <2.0.0-rc.1."""
        report = sieve.match("2.0.0-beta.2", ["^2.0", ">=1.9 <2.0.0-rc.1"])
        assert report.matched
        assert report.matched_ranges == (">=1.9 <2.0.0-rc.1",)
        assert report.normalized_ranges == (">=2.0.0 <3.0.0-0", ">=1.9.0 <2.0.0-rc.1")

    def test_invalid_range_raises_even_after_a_match(self, sieve):
        """Test that a bad range is never treated as no match."""
        with pytest.raises(InvalidRangeError):
            sieve.match("1.0.0", ["^1.0", ""])

    def test_invalid_version(self, sieve):
        """Test that a bad version raises."""
        with pytest.raises(InvalidVersionError):
            sieve.match("invalid", ["^1.0"])

    def test_to_dict(self, sieve):
        """Test the camelCase serialization."""
        assert sieve.match("1.0.0", ["1.0.0"]).to_dict() == {
            "matched": True,
            "matchedRanges": ["1.0.0"],
            "normalizedRanges": ["=1.0.0"],
        }


class TestParsing:
    """Tests for the parse entry points."""

    def test_parse_version(self, sieve):
        """Test parse_version through the facade."""
        assert sieve.parse_version("v1.2.3").core_version == (1, 2, 3)

    def test_parse_version_invalid(self, sieve):
        """Test that 'invalid' is rejected."""
        with pytest.raises(InvalidVersionError):
            sieve.parse_version("invalid")

    def test_parse_range_empty(self, sieve):
        """Test that an empty range is rejected."""
        with pytest.raises(InvalidRangeError):
            sieve.parse_range("")


class TestVersionLists:
    """Tests for filter, max_satisfying and min_satisfying."""

    VERSIONS = ["1.0.0", "2.0.0", "1.5.0", "1.5.0-beta", "v1.2.0", "0.9.0"]

    def test_filter(self, sieve):
        """Test that the original strings are returned in input order."""
        assert sieve.filter(self.VERSIONS, "^1.0") == ["1.0.0", "1.5.0", "1.5.0-beta", "v1.2.0"]

    def test_max_satisfying(self, sieve):
        """Test the highest matching version."""
        assert sieve.max_satisfying(self.VERSIONS, "^1.0") == "1.5.0"
        assert sieve.max_satisfying(self.VERSIONS, "^3.0") is None

    def test_min_satisfying(self, sieve):
        """Test the lowest matching version."""
        assert sieve.min_satisfying(self.VERSIONS, ">=1.1") == "v1.2.0"

    def test_ties_keep_first_spelling(self, sieve):
        """Test that equal versions resolve to the first spelling."""
        assert sieve.max_satisfying(["1.0.0+a", "v1.0.0", "1.0.0+b"], "1.x") == "1.0.0+a"


class TestConstruction:
    """Tests for dialect and configuration resolution."""

    def test_default_dialect(self, sieve):
        """Test that the generic dialect is used by default."""
        assert sieve.dialect.name == "generic-semver"

    def test_dialect_by_id(self):
        """Test that dialects can be selected by ID."""
        assert isinstance(Sieve("npm").dialect, NpmDialect)

    def test_dialect_instance(self):
        """Test that a dialect instance is used as given."""
        dialect = NpmDialect()
        assert Sieve(dialect).dialect is dialect

    def test_unknown_dialect(self):
        """Test that unknown dialect IDs are rejected."""
        with pytest.raises(UnknownDialectError, match="Known dialects"):
            Sieve("cargo")

    def test_dialect_overrides_apply(self):
        """Test that the resolved configuration carries the dialect overrides."""
        sieve = Sieve("maven", SieveConfiguration(allow_v_prefix=True))
        assert sieve.configuration.include_prereleases
        assert not sieve.configuration.allow_v_prefix
        assert sieve.evaluator.configuration is sieve.configuration

    def test_custom_comparator(self, parse):
        """Test that an injected comparator is used for evaluation."""

        class ReversedComparator(semver_sieve.SemverComparator):
            def compare(self, a, b):
                return -super().compare(a, b)

        sieve = Sieve(comparator=ReversedComparator())
        assert sieve.comparator.compare(parse("1.0.0"), parse("2.0.0")) == 1
        assert sieve.includes("1.0.0", [">2.0.0"])

    def test_structural_dialect(self):
        """Test that any object with the dialect methods can drive a Sieve."""

        class UpperCaseDialect:
            name = "upper"

            def resolve_configuration(self, configuration=None):
                return (configuration or SieveConfiguration()).with_prereleases(True)

            def parse_version(self, version, configuration=None):
                return semver_sieve.VersionParser().parse(version.lower(), configuration)

            def parse_range(self, range_text, configuration=None):
                return semver_sieve.RangeParser().parse(range_text.lower(), configuration)

        sieve = Sieve(UpperCaseDialect())
        assert sieve.configuration.include_prereleases
        assert sieve.includes("V1.5.0-BETA", ["<2.0.0"])
        assert repr(sieve) == "Sieve(dialect='upper')"


class TestModuleHelpers:
    """Tests for the package-level functions."""

    def test_compare(self):
        """Test compare on version strings."""
        assert semver_sieve.compare("1.0.0", "2.0.0") == -1
        assert semver_sieve.compare("1.0.0+a", "1.0.0+b") == 0

    def test_satisfies(self):
        """Test satisfies with a single range."""
        assert semver_sieve.satisfies("1.2.4", "^1.2.3")
        assert not semver_sieve.satisfies("2.0.0", "^1.2.3")

    def test_helpers_accept_parsed_values(self):
        """Test compare and satisfies on values returned by the parse helpers."""
        parse_version = semver_sieve.parse_version
        assert semver_sieve.compare(parse_version("1.0.0-alpha"), parse_version("1.0.0")) == -1
        assert semver_sieve.compare(parse_version("1.2.0"), "1.1.9") == 1
        assert semver_sieve.satisfies(parse_version("1.2.4"), semver_sieve.parse_range("^1.2.3"))
        assert not semver_sieve.satisfies(parse_version("2.0.0-beta"), "^1.2.3")
        assert semver_sieve.satisfies(
            "1.5.0-beta",
            semver_sieve.parse_range("<2.0.0"),
            configuration=SieveConfiguration().with_prereleases(True),
        )

    def test_includes_and_match(self):
        """Test includes and match with a dialect."""
        assert semver_sieve.includes("latest", [">=1.0.0"], dialect="npm")
        assert semver_sieve.match("1.2.3", ["~1.2"]).matched_ranges == ("~1.2",)

    def test_parse_helpers(self):
        """Test parse_version and parse_range."""
        assert semver_sieve.parse_version("1.2.3-beta").prerelease == ("beta",)
        assert str(semver_sieve.parse_range("~1.2.3")) == ">=1.2.3 <1.3.0-0"
