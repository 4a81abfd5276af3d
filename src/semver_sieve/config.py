"""Configuration bundle and JSON loader.

``SieveConfiguration`` is the immutable option bundle consumed by the parsers
and the evaluator. ``load_configuration`` reads it from a JSON document
(explicit path, then the ``SEMVER_SIEVE_CONFIG`` environment variable) and
validates the document against ``CONFIGURATION_SCHEMA`` with jsonschema.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any
from collections.abc import Iterable, Mapping

from jsonschema import Draft202012Validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "SEMVER_SIEVE_CONFIG"
DEFAULT_MAX_VERSION_LENGTH = 256
MAX_VERSION_LENGTH_CEILING = 1024

# Operators a custom alias may be rewritten to.
CANONICAL_OPERATORS = frozenset({"<", "<=", ">", ">=", "=", "!=", "^", "~"})

CONFIGURATION_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "include_prereleases": {"type": "boolean"},
        "strict_segments": {"type": "boolean"},
        "allow_v_prefix": {"type": "boolean"},
        "case_insensitive": {"type": "boolean"},
        "allow_leading_zeros": {"type": "boolean"},
        "max_version_length": {
            "type": "integer",
            "minimum": 1,
            "maximum": MAX_VERSION_LENGTH_CEILING,
        },
        "custom_operators": {
            "type": "object",
            "additionalProperties": {"type": "string", "minLength": 1},
        },
    },
}

_FEATURES = {
    "prereleases": "include_prereleases",
    "v_prefix": "allow_v_prefix",
    "leading_zeros": "allow_leading_zeros",
    "case_insensitive": "case_insensitive",
}


@dataclass(frozen=True)
class SieveConfiguration:
    """Options shared by parsing and evaluation."""

    include_prereleases: bool = False
    strict_segments: bool = False
    allow_v_prefix: bool = True
    case_insensitive: bool = True
    allow_leading_zeros: bool = False
    max_version_length: int = DEFAULT_MAX_VERSION_LENGTH
    custom_operators: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        length = self.max_version_length
        if isinstance(length, bool) or not isinstance(length, int):
            raise ConfigurationError("max_version_length", "Must be an integer")
        if length < 1:
            raise ConfigurationError(
                "max_version_length", "Maximum version length must be at least 1"
            )
        if length > MAX_VERSION_LENGTH_CEILING:
            raise ConfigurationError(
                "max_version_length",
                f"Maximum version length cannot exceed {MAX_VERSION_LENGTH_CEILING} characters",
            )
        for entry in self.custom_operators:
            if not isinstance(entry, tuple) or len(entry) != 2:
                raise ConfigurationError("custom_operators", f"Malformed entry: {entry!r}")
            alias, operator = entry
            if not isinstance(alias, str) or not alias.strip() or alias != alias.strip():
                raise ConfigurationError(
                    "custom_operators", "Custom operator keys must be non-empty strings"
                )
            if operator not in CANONICAL_OPERATORS:
                raise ConfigurationError(
                    "custom_operators",
                    f"Alias '{alias}' must map to one of {', '.join(sorted(CANONICAL_OPERATORS))}",
                )
        object.__setattr__(self, "custom_operators", _operator_table(self.custom_operators))

    @classmethod
    def default(cls) -> SieveConfiguration:
        return cls()

    @classmethod
    def strict(cls) -> SieveConfiguration:
        """Three segments, no ``v`` prefix, case-sensitive identifiers."""
        return cls(
            include_prereleases=False,
            strict_segments=True,
            allow_v_prefix=False,
            case_insensitive=False,
            allow_leading_zeros=False,
        )

    @classmethod
    def lenient(cls) -> SieveConfiguration:
        """Prereleases included and leading zeros accepted."""
        return cls(
            include_prereleases=True,
            strict_segments=False,
            allow_v_prefix=True,
            case_insensitive=True,
            allow_leading_zeros=True,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SieveConfiguration:
        """Build a configuration from a mapping of option names to values."""
        validate_document(data)
        values = dict(data)
        if "custom_operators" in values:
            values["custom_operators"] = _operator_table(values["custom_operators"])
        return cls(**values)

    def with_prereleases(self, include_prereleases: bool) -> SieveConfiguration:
        return replace(self, include_prereleases=include_prereleases)

    def with_strictness(self, strict_segments: bool) -> SieveConfiguration:
        return replace(self, strict_segments=strict_segments)

    def with_custom_operators(
        self, custom_operators: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> SieveConfiguration:
        return replace(self, custom_operators=_operator_table(custom_operators))

    def with_options(self, **options: Any) -> SieveConfiguration:
        """Return a copy with the given options replaced."""
        if "custom_operators" in options:
            options["custom_operators"] = _operator_table(options["custom_operators"])
        try:
            return replace(self, **options)
        except TypeError as exc:
            raise ConfigurationError(", ".join(sorted(options)), str(exc)) from exc

    def allows(self, feature: str) -> bool:
        attribute = _FEATURES.get(feature)
        return bool(getattr(self, attribute)) if attribute else False

    @property
    def operator_aliases(self) -> dict[str, str]:
        return dict(self.custom_operators)

    def fingerprint(self) -> tuple[Any, ...]:
        """Hashable key identifying these options, for memoization by callers."""
        return (
            self.include_prereleases,
            self.strict_segments,
            self.allow_v_prefix,
            self.case_insensitive,
            self.allow_leading_zeros,
            self.max_version_length,
            self.custom_operators,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "include_prereleases": self.include_prereleases,
            "strict_segments": self.strict_segments,
            "allow_v_prefix": self.allow_v_prefix,
            "case_insensitive": self.case_insensitive,
            "allow_leading_zeros": self.allow_leading_zeros,
            "max_version_length": self.max_version_length,
            "custom_operators": self.operator_aliases,
        }


def _operator_table(
    table: Mapping[str, str] | Iterable[tuple[str, str]],
) -> tuple[tuple[str, str], ...]:
    items = table.items() if isinstance(table, Mapping) else table
    try:
        pairs = [(alias, operator) for alias, operator in items]
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("custom_operators", "Expected alias/operator pairs") from exc
    # Longest alias first so "~>" is tried before "~".
    return tuple(sorted(pairs, key=lambda pair: (-len(str(pair[0])), str(pair[0]))))


def _format_errors(errors: Iterable[Any]) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(document: Any) -> None:
    """Validate a configuration document against ``CONFIGURATION_SCHEMA``.

    Raises:
        ConfigurationError: listing every schema violation.
    """
    validator = Draft202012Validator(CONFIGURATION_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise ConfigurationError("document", "\n" + _format_errors(errors))


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. SEMVER_SIEVE_CONFIG environment variable
    3. None (use defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_configuration(path: Path | str | None = None) -> SieveConfiguration:
    """Load and validate a configuration from a JSON file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            SEMVER_SIEVE_CONFIG env var or falls back to the defaults.

    Returns:
        The validated SieveConfiguration.

    Raises:
        ConfigurationError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return SieveConfiguration.default()

    if not config_path.exists():
        raise ConfigurationError(str(config_path), "Configuration file not found")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            str(config_path), f"Failed to read configuration file: {exc}"
        ) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            str(config_path), f"Invalid JSON in configuration file: {exc}"
        ) from exc

    logger.debug("Loaded configuration from %s", config_path)
    return SieveConfiguration.from_dict(data)
