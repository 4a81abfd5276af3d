"""Dialect base class.

A dialect is an option preset plus string rewriting layered on the shared
parsers. Subclasses set ``name``, ``display_name``, ``supported_operators`` and
``option_overrides`` and override the ``normalize_*`` hooks.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Protocol

from ..config import SieveConfiguration
from ..models import ParsedRange, ParsedVersion
from ..parsers import RangeParser, VersionParser

logger = logging.getLogger(__name__)


class DialectProtocol(Protocol):
    """Structural contract the facade relies on."""

    name: str

    def parse_version(
        self, version: str, configuration: SieveConfiguration | None = None
    ) -> ParsedVersion: ...

    def parse_range(
        self, range_text: str, configuration: SieveConfiguration | None = None
    ) -> ParsedRange: ...

    def resolve_configuration(
        self, configuration: SieveConfiguration | None = None
    ) -> SieveConfiguration: ...


class Dialect:
    """Generic building block for ecosystem dialects."""

    name: ClassVar[str] = "base"
    display_name: ClassVar[str] = "Base dialect"
    supported_operators: ClassVar[tuple[str, ...]] = ()
    option_overrides: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        version_parser: VersionParser | None = None,
        range_parser: RangeParser | None = None,
    ) -> None:
        self.version_parser = version_parser or VersionParser()
        self.range_parser = range_parser or RangeParser(self.version_parser)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def resolve_configuration(
        self, configuration: SieveConfiguration | None = None
    ) -> SieveConfiguration:
        """Apply this dialect's option overrides on top of ``configuration``.

        Operator aliases are merged: the caller's aliases are kept and the
        dialect's own win on conflict.
        """
        config = configuration or SieveConfiguration.default()
        if not self.option_overrides:
            return config
        overrides = dict(self.option_overrides)
        if "custom_operators" in overrides:
            overrides["custom_operators"] = {
                **config.operator_aliases,
                **dict(overrides["custom_operators"]),
            }
        return config.with_options(**overrides)

    def normalize_version(self, version: str) -> str:
        return version.strip()

    def normalize_range(self, range_text: str) -> str:
        return range_text.strip()

    def parse_version(
        self, version: str, configuration: SieveConfiguration | None = None
    ) -> ParsedVersion:
        config = self.resolve_configuration(configuration)
        normalized = self.normalize_version(version)
        if normalized != version.strip():
            logger.debug("%s: version %r normalized to %r", self.name, version, normalized)
        return self.version_parser.parse(normalized, config)

    def parse_range(
        self, range_text: str, configuration: SieveConfiguration | None = None
    ) -> ParsedRange:
        config = self.resolve_configuration(configuration)
        normalized = self.normalize_range(range_text)
        if normalized != range_text.strip():
            logger.debug("%s: range %r normalized to %r", self.name, range_text, normalized)
        return self.range_parser.parse(normalized, config)

    def supports_operator(self, operator: str) -> bool:
        return operator in self.supported_operators
