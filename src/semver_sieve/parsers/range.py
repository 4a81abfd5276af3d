"""Parse range expressions into ParsedRange values.

Supported expressions:
- exact versions (e.g., "1.2.3")
- comparators and compound sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- caret ranges ^x.y.z → >=x.y.z <x+1.0.0-0
- tilde ranges ~x.y.z → >=x.y.z <x.y+1.0-0
- wildcards 1.2.x, 1.x, *
- hyphen ranges 1.2.3 - 1.4.5
- alternatives joined with ||
"""

from __future__ import annotations

import re

from ..config import SieveConfiguration
from ..errors import InvalidRangeError, InvalidVersionError
from ..models import ParsedRange, ParsedVersion, VersionConstraint
from .version import VersionParser

_OPERATOR = re.compile(r"^(>=|<=|!==|!=|==|>|<|=)")
_FLOOR_SUFFIX = re.compile(r"^(?P<core>[^-+]+)-0(?P<build>\+.*)?$")
_WILDCARDS = {"x", "X", "*"}
_EQUALITY = {"=", "==", "!=", "!=="}

SUPPORTED_PATTERNS = (
    "Exact: 1.2.3",
    "Comparison: >=1.0.0, <2.0.0, !=1.5.0",
    "Caret: ^1.2.3 (compatible within major)",
    "Tilde: ~1.2.3 (compatible within minor)",
    "Wildcard: 1.2.x, 1.x, *",
    "Hyphen: 1.2.3 - 1.4.5",
    "Compound: >=1.0.0 <2.0.0",
    "OR: ^1.0 || ^2.0",
)


def _core_segments(version_text: str) -> list[str]:
    """Return the dot-separated core of a version, without prefix, prerelease or build."""
    text = version_text
    if text[:1] in ("v", "V") and text[1:2].isdigit():
        text = text[1:]
    core = re.split(r"[-+]", text, maxsplit=1)[0]
    return core.split(".")


def _is_wildcard_token(token: str) -> bool:
    version_text = _OPERATOR.sub("", token)
    if not version_text:
        return False
    return any(segment in _WILDCARDS for segment in _core_segments(version_text))


class RangeParser:
    """Stateless parser for range expressions, built on a VersionParser."""

    def __init__(self, version_parser: VersionParser | None = None) -> None:
        self._version_parser = version_parser or VersionParser()

    @property
    def version_parser(self) -> VersionParser:
        return self._version_parser

    def parse(self, input: str, configuration: SieveConfiguration | None = None) -> ParsedRange:
        """Parse ``input`` into a ParsedRange.

        Raises:
            InvalidRangeError: when the expression is empty or malformed, or an
                embedded version is invalid.
        """
        config = configuration or SieveConfiguration.default()
        text = self._apply_operator_aliases(input.strip(), config)

        if not text:
            raise InvalidRangeError(input, "Range string cannot be empty")

        if text == "*":
            return ParsedRange.any(raw=input)

        if "||" in text:
            return self._parse_or_range(text, input, config)

        return self._parse_and_range(text, config, raw=input)

    def validate(self, input: str, configuration: SieveConfiguration | None = None) -> bool:
        try:
            self.parse(input, configuration)
        except InvalidRangeError:
            return False
        return True

    def supported_patterns(self) -> list[str]:
        return list(SUPPORTED_PATTERNS)

    def _apply_operator_aliases(self, text: str, config: SieveConfiguration) -> str:
        table = config.operator_aliases
        if not table:
            return text
        # One pass, longest alias first, so a rewrite is never rewritten again.
        aliases = sorted(table, key=lambda alias: (-len(alias), alias))
        pattern = re.compile(r"(?:^|(?<=[\s|,]))(" + "|".join(map(re.escape, aliases)) + ")")
        return pattern.sub(lambda found: table[found.group(1)], text)

    def _parse_or_range(self, text: str, raw: str, config: SieveConfiguration) -> ParsedRange:
        groups = []
        for part in (p.strip() for p in text.split("||")):
            if not part:
                raise InvalidRangeError(raw, "Empty OR clause")
            groups.append(self._parse_and_range(part, config, raw=part).constraints)
        return ParsedRange.any_of(groups, raw=raw)

    def _parse_and_range(self, text: str, config: SieveConfiguration, raw: str) -> ParsedRange:
        if " - " in text:
            return self._parse_hyphen_range(text, config, raw)

        if text.startswith("^"):
            return self._parse_caret_range(text, config, raw)

        if text.startswith("~"):
            return self._parse_tilde_range(text, config, raw)

        if any(_is_wildcard_token(token) for token in text.split()):
            return self._parse_wildcard_range(text, config, raw)

        # space separated constraints like ">=1.0.0 <2.0.0"
        return self._parse_compound_range(text, config, raw)

    def _parse_version(
        self, version_text: str, config: SieveConfiguration, raw: str
    ) -> ParsedVersion:
        try:
            return self._version_parser.parse(version_text, config)
        except InvalidVersionError as exc:
            raise InvalidRangeError(raw, exc.reason or str(exc)) from exc

    def _parse_hyphen_range(self, text: str, config: SieveConfiguration, raw: str) -> ParsedRange:
        lower_text, _, upper_text = (part.strip() for part in text.partition(" - "))
        if not lower_text or not upper_text:
            raise InvalidRangeError(
                raw, "Malformed hyphen range. Expected format: 'version1 - version2'"
            )
        lower = self._parse_version(lower_text, config, raw)
        upper = self._parse_version(upper_text, config, raw)
        return ParsedRange.all_of(
            (VersionConstraint(">=", lower), VersionConstraint("<=", upper)), raw=raw
        )

    def _parse_caret_range(self, text: str, config: SieveConfiguration, raw: str) -> ParsedRange:
        version_text = text[1:].strip()
        if not version_text:
            raise InvalidRangeError(raw, "Malformed caret range. Expected format: '^version'")
        version = self._parse_version(version_text, config, raw)

        # ^1.2.3 := >=1.2.3 <2.0.0-0
        # ^0.2.3 := >=0.2.3 <0.3.0-0
        # ^0.0.3 := >=0.0.3 <0.0.4-0
        if version.major > 0:
            upper = ParsedVersion(version.major + 1, 0, 0)
        elif version.minor > 0:
            upper = ParsedVersion(0, version.minor + 1, 0)
        else:
            upper = ParsedVersion(0, 0, version.patch + 1)

        return ParsedRange.all_of(
            (VersionConstraint(">=", version), VersionConstraint.upper_floor(upper)), raw=raw
        )

    def _parse_tilde_range(self, text: str, config: SieveConfiguration, raw: str) -> ParsedRange:
        version_text = text[1:].strip()
        if not version_text:
            raise InvalidRangeError(raw, "Malformed tilde range. Expected format: '~version'")
        version = self._parse_version(version_text, config, raw)

        # ~1.2.3 := >=1.2.3 <1.3.0-0
        # ~1.2 := >=1.2.0 <1.3.0-0
        # ~1 := >=1.0.0 <2.0.0-0
        if len(_core_segments(version_text)) == 1:
            upper = ParsedVersion(version.major + 1, 0, 0)
        else:
            upper = ParsedVersion(version.major, version.minor + 1, 0)

        return ParsedRange.all_of(
            (VersionConstraint(">=", version), VersionConstraint.upper_floor(upper)), raw=raw
        )

    def _parse_wildcard_range(
        self, text: str, config: SieveConfiguration, raw: str
    ) -> ParsedRange:
        tokens = text.split()
        if len(tokens) != 1 or _OPERATOR.match(text):
            raise InvalidRangeError(
                raw, "Unsupported wildcard pattern: wildcards must stand alone"
            )
        if re.search(r"[-+]", text):
            raise InvalidRangeError(
                raw, "Unsupported wildcard pattern: prerelease or build with wildcard"
            )

        if text[0] in "vV" and not config.allow_v_prefix:
            raise InvalidRangeError(raw, 'Version prefix "v" is not allowed')

        segments = _core_segments(text)
        if len(segments) > 3:
            raise InvalidRangeError(raw, "Unsupported wildcard pattern")
        if segments[0] in _WILDCARDS:
            if all(segment in _WILDCARDS for segment in segments):
                return ParsedRange.any(raw=raw)
            raise InvalidRangeError(raw, "Unsupported wildcard pattern")

        first_wildcard = next(i for i, s in enumerate(segments) if s in _WILDCARDS)
        if not all(s in _WILDCARDS for s in segments[first_wildcard:]):
            raise InvalidRangeError(raw, "Unsupported wildcard pattern")

        fixed = segments[:first_wildcard]
        lower = self._parse_version(".".join(fixed + ["0"] * (3 - len(fixed))), config, raw)

        if len(fixed) == 1:
            # 1.x := >=1.0.0 <2.0.0-0
            upper = ParsedVersion(lower.major + 1, 0, 0)
        else:
            # 1.2.x := >=1.2.0 <1.3.0-0
            upper = ParsedVersion(lower.major, lower.minor + 1, 0)

        return ParsedRange.all_of(
            (VersionConstraint(">=", lower), VersionConstraint.upper_floor(upper)), raw=raw
        )

    def _parse_compound_range(
        self, text: str, config: SieveConfiguration, raw: str
    ) -> ParsedRange:
        tokens: list[str] = []
        pending = ""
        for token in text.split():
            # ">= 1.2.3" is written with a space after the operator.
            if pending:
                token, pending = pending + token, ""
            if _OPERATOR.fullmatch(token):
                pending = token
                continue
            tokens.append(token)
        if pending:
            raise InvalidRangeError(raw, f"Empty version in constraint '{pending}'")
        if not tokens:
            raise InvalidRangeError(raw, "No valid constraints found")

        return ParsedRange.all_of(
            (self._parse_constraint(token, config, raw) for token in tokens), raw=raw
        )

    def _parse_constraint(
        self, token: str, config: SieveConfiguration, raw: str
    ) -> VersionConstraint:
        match = _OPERATOR.match(token)
        if match:
            operator = match.group(1)
            version_text = token[match.end() :].strip()
        else:
            # No explicit operator means exact match
            operator = "="
            version_text = token

        if not version_text:
            raise InvalidRangeError(raw, f"Empty version in constraint '{token}'")

        # A "-0" target on an ordering operator is the floor below all prereleases.
        floor = operator not in _EQUALITY and _FLOOR_SUFFIX.match(version_text) is not None
        version = self._parse_version(version_text, config, raw)
        return VersionConstraint(operator, version, exclusive_floor=floor)
