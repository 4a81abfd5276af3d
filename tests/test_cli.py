"""
Tests for the semver-sieve command line.
"""

import json

import pytest

from semver_sieve.cli import EXIT_ERROR, EXIT_MATCHED, EXIT_NOT_MATCHED, main
from semver_sieve.config import CONFIG_PATH_ENV_VAR


class TestMain:
    """Tests for exit codes and output."""

    def test_matched(self, capsys):
        """Test that a match prints the report and exits 0."""
        assert main(["1.2.4", "^1.2.3", "^2.0"]) == EXIT_MATCHED
        report = json.loads(capsys.readouterr().out)
        assert report == {
            "matched": True,
            "matchedRanges": ["^1.2.3"],
            "normalizedRanges": [">=1.2.3 <2.0.0-0", ">=2.0.0 <3.0.0-0"],
        }

    def test_not_matched(self, capsys):
        """Test that no match exits 1."""
        assert main(["3.0.0", "^1.0"]) == EXIT_NOT_MATCHED
        assert json.loads(capsys.readouterr().out)["matched"] is False

    def test_invalid_version(self, capsys):
        """Test that invalid input exits 2 with an error on stderr."""
        assert main(["invalid", "^1.0"]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("ERROR: Invalid version string: 'invalid'")

    def test_invalid_range(self, capsys):
        """Test that an invalid range exits 2."""
        assert main(["1.0.0", "x.1"]) == EXIT_ERROR
        assert "Invalid range string" in capsys.readouterr().err

    def test_dialect(self, capsys):
        """Test the --dialect option."""
        assert main(["2.0-SNAPSHOT", "[1.0,2.0)", "--dialect", "maven"]) == EXIT_MATCHED

    def test_unknown_dialect(self, capsys):
        """Test that argparse rejects unknown dialects."""
        with pytest.raises(SystemExit) as exc_info:
            main(["1.0.0", "1.0.0", "--dialect", "cargo"])
        assert exc_info.value.code == 2

    def test_include_prereleases(self, capsys):
        """Test the --include-prereleases flag."""
        assert main(["1.5.0-beta", "<2.0.0"]) == EXIT_NOT_MATCHED
        assert main(["1.5.0-beta", "<2.0.0", "--include-prereleases"]) == EXIT_MATCHED

    def test_strict(self, capsys):
        """Test the --strict flag."""
        assert main(["1.2", "^1.0"]) == EXIT_MATCHED
        assert main(["1.2", "^1.0", "--strict"]) == EXIT_ERROR

    def test_config_file(self, tmp_path, capsys):
        """Test the --config option."""
        path = tmp_path / "sieve.json"
        path.write_text(json.dumps({"include_prereleases": True}), encoding="utf-8")
        assert main(["1.5.0-beta", "<2.0.0", "--config", str(path)]) == EXIT_MATCHED

    def test_config_from_env(self, tmp_path, monkeypatch, capsys):
        """Test that SEMVER_SIEVE_CONFIG is honoured."""
        path = tmp_path / "sieve.json"
        path.write_text(json.dumps({"allow_v_prefix": False}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(path))
        assert main(["v1.0.0", "1.0.0"]) == EXIT_ERROR

    def test_missing_config(self, tmp_path, capsys):
        """Test that a missing config file exits 2."""
        assert main(["1.0.0", "1.0.0", "--config", str(tmp_path / "nope.json")]) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("ERROR:")

    def test_verbose(self, capsys):
        """Test that --verbose does not change the result."""
        assert main(["1.0.0", "1.0.0", "--verbose"]) == EXIT_MATCHED
