"""Parse version strings into ParsedVersion values.

Grammar (SemVer 2.0.0): MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD], optionally
prefixed with "v". With ``strict_segments`` disabled, MINOR and PATCH may be
omitted and default to 0.
"""

from __future__ import annotations

import re

from ..config import SieveConfiguration
from ..errors import InvalidVersionError
from ..models import ParsedVersion

_STRICT_PATTERN = re.compile(
    r"^[vV]?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<prerelease>[^+]*))?(?:\+(?P<build>.*))?$",
    re.ASCII,
)
_LOOSE_PATTERN = re.compile(
    r"^[vV]?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<prerelease>[^+]*))?(?:\+(?P<build>.*))?$",
    re.ASCII,
)
_IDENTIFIER = re.compile(r"[0-9A-Za-z-]+")
_NEGATIVE = re.compile(r"^[vV]?-\d")

SUPPORTED_PATTERNS = (
    "MAJOR.MINOR.PATCH",
    "MAJOR.MINOR.PATCH-PRERELEASE",
    "MAJOR.MINOR.PATCH+BUILD",
    "MAJOR.MINOR.PATCH-PRERELEASE+BUILD",
    "vMAJOR.MINOR.PATCH (with v prefix)",
    "MAJOR.MINOR (loose mode)",
    "MAJOR (loose mode)",
)


def _has_leading_zero(segment: str) -> bool:
    return len(segment) > 1 and segment.startswith("0")


class VersionParser:
    """Stateless parser for version strings."""

    def parse(
        self, input: str, configuration: SieveConfiguration | None = None
    ) -> ParsedVersion:
        """Parse ``input`` into a ParsedVersion.

        Raises:
            InvalidVersionError: when the input is empty, too long, or does not
                follow the grammar selected by ``configuration``.
        """
        config = configuration or SieveConfiguration.default()
        text = input.strip()
        self._validate_input(text, config)

        pattern = _STRICT_PATTERN if config.strict_segments else _LOOSE_PATTERN
        match = pattern.match(text)
        if match is None:
            raise InvalidVersionError(text, "Does not match semantic version pattern")

        segments = [s for s in match.group("major", "minor", "patch") if s is not None]
        if not config.allow_leading_zeros:
            for segment in segments:
                if _has_leading_zero(segment):
                    raise InvalidVersionError(
                        text, f"Version segment '{segment}' has leading zeros"
                    )
        major, minor, patch = (int(s) for s in segments + ["0"] * (3 - len(segments)))

        prerelease: tuple[str, ...] = ()
        raw_prerelease = match.group("prerelease")
        # A bare "-0" is the lowest possible prerelease; keep it as a release.
        if raw_prerelease is not None and raw_prerelease != "0":
            prerelease = self._parse_prerelease(text, raw_prerelease, config)

        build: tuple[str, ...] = ()
        raw_build = match.group("build")
        if raw_build is not None:
            build = self._parse_build(text, raw_build)

        return ParsedVersion(
            major=major,
            minor=minor,
            patch=patch,
            prerelease=prerelease,
            build=build,
            raw=input,
        )

    def validate(self, input: str, configuration: SieveConfiguration | None = None) -> bool:
        try:
            self.parse(input, configuration)
        except InvalidVersionError:
            return False
        return True

    def supported_patterns(self) -> list[str]:
        return list(SUPPORTED_PATTERNS)

    def _validate_input(self, text: str, config: SieveConfiguration) -> None:
        if not text:
            raise InvalidVersionError(text, "Version string cannot be empty")

        if len(text) > config.max_version_length:
            raise InvalidVersionError(
                text,
                f"Version string is too long ({len(text)} characters, "
                f"max {config.max_version_length})",
            )

        if not config.allow_v_prefix and text[0] in "vV":
            raise InvalidVersionError(text, 'Version prefix "v" is not allowed')

        if _NEGATIVE.match(text):
            raise InvalidVersionError(text, "Version numbers cannot be negative")

    def _parse_prerelease(
        self, text: str, prerelease: str, config: SieveConfiguration
    ) -> tuple[str, ...]:
        identifiers = prerelease.split(".")
        for identifier in identifiers:
            if identifier == "":
                raise InvalidVersionError(
                    text, f"Empty prerelease identifier in '{prerelease}'"
                )
            if not _IDENTIFIER.fullmatch(identifier):
                raise InvalidVersionError(
                    text, f"Invalid characters in prerelease identifier: {identifier}"
                )
            if (
                identifier.isdigit()
                and _has_leading_zero(identifier)
                and not config.allow_leading_zeros
            ):
                raise InvalidVersionError(
                    text, f"Numeric prerelease identifier '{identifier}' has leading zeros"
                )
        if config.case_insensitive:
            identifiers = [identifier.lower() for identifier in identifiers]
        return tuple(identifiers)

    def _parse_build(self, text: str, build: str) -> tuple[str, ...]:
        identifiers = build.split(".")
        for identifier in identifiers:
            if identifier == "":
                raise InvalidVersionError(text, f"Empty build identifier in '{build}'")
            if not _IDENTIFIER.fullmatch(identifier):
                raise InvalidVersionError(
                    text, f"Invalid characters in build identifier: {identifier}"
                )
        return tuple(identifiers)
