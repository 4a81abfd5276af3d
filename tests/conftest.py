"""
Shared fixtures for the semver-sieve tests.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to path if running tests without installing
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from semver_sieve.comparator import SemverComparator  # noqa: E402
from semver_sieve.config import CONFIG_PATH_ENV_VAR, SieveConfiguration  # noqa: E402
from semver_sieve.parsers import RangeParser, VersionParser  # noqa: E402


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    """Keep a developer's SEMVER_SIEVE_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)


@pytest.fixture
def version_parser():
    return VersionParser()


@pytest.fixture
def range_parser():
    return RangeParser()


@pytest.fixture
def comparator():
    return SemverComparator()


@pytest.fixture
def parse(version_parser):
    """Parse a version with the default configuration."""
    return version_parser.parse


@pytest.fixture
def lenient():
    return SieveConfiguration.lenient()
