"""Maven dialect.

Maven versions ("1.0", "1.0-SNAPSHOT", "1.0-alpha-1", "5.3.9.RELEASE",
"1.2.3.4") are rewritten to SemVer before parsing:

    1.0-SNAPSHOT   -> 1.0.0-snapshot
    1.0-alpha-1    -> 1.0.0-alpha.1
    5.3.9.RELEASE  -> 5.3.9
    1.2.3.4        -> 1.2.3+segments.4

Ranges use the bracket notation from the Maven enforcer docs:

    [1.0,2.0)            -> >=1.0.0 <2.0.0
    (,1.0]               -> <=1.0.0
    [1.0]                -> =1.0.0
    [1.0,2.0),[3.0,)     -> >=1.0.0 <2.0.0 || >=3.0.0
    1.0+                 -> >=1.0.0
    1.0                  -> =1.0.0

A plain version is an exact requirement. Anything else falls through to the
generic grammar with its versions rewritten the same way.
"""

from __future__ import annotations

import re

from ..config import SieveConfiguration
from ..errors import InvalidRangeError
from ..models import ParsedRange
from .base import Dialect

# Qualifiers that mark a release and carry no ordering information.
RELEASE_QUALIFIERS = frozenset({"ga", "final", "release"})

_VERSION = re.compile(r"^(?P<numbers>\d+(?:\.\d+)*)(?:[.-](?P<qualifier>[^\s,\[\]()]+))?$")
_BRACKET_SET = re.compile(r"[\[(][^\[\]()]*[\])]")
_TOKEN = re.compile(r"^(?P<operator>>=|<=|!=|==|>|<|=|\^|~)?(?P<version>.+)$")
_WILDCARDS = frozenset({"x", "X", "*"})


def _match_version(text: str) -> re.Match[str] | None:
    match = _VERSION.match(text)
    if match and match.group("qualifier") in _WILDCARDS:
        return None
    return match


def _is_bracket_range(text: str) -> bool:
    return text[:1] in "[(" and text[-1:] in "])"


class MavenDialect(Dialect):
    name = "maven"
    display_name = "Maven"
    supported_operators = (
        # Range notation
        "[",
        "]",
        "(",
        ")",
        ",",
        # Soft requirements
        "+",
        "=",
        "!=",
        ">",
        ">=",
        "<",
        "<=",
    )
    option_overrides = {
        "allow_v_prefix": False,
        "strict_segments": False,
        "case_insensitive": True,
        "include_prereleases": True,
    }

    def normalize_version(self, version: str) -> str:
        text = version.strip()
        match = _match_version(text)
        if not match:
            return text

        numbers = match.group("numbers").split(".")
        core = ".".join(numbers[:3] + ["0"] * (3 - len(numbers[:3])))
        extra = numbers[3:]

        qualifier = (match.group("qualifier") or "").lower().replace("-", ".")
        identifiers = [
            part for part in qualifier.split(".") if part and part not in RELEASE_QUALIFIERS
        ]

        normalized = core
        if identifiers:
            normalized += "-" + ".".join(identifiers)
        if extra:
            normalized += "+" + ".".join(["segments", *extra])
        return normalized

    def normalize_range(self, range_text: str) -> str:
        text = range_text.strip()
        if not text:
            return text

        if _is_bracket_range(text):
            return " || ".join(
                self._normalize_bracket_set(part, range_text) for part in self._bracket_sets(text)
            )

        if text.endswith("+"):
            # 1.0+ := >=1.0
            return ">=" + self.normalize_version(text[:-1])

        if _match_version(text):
            return "=" + self.normalize_version(text)

        return " ".join(self._normalize_token(token) for token in text.split())

    def parse_range(
        self, range_text: str, configuration: SieveConfiguration | None = None
    ) -> ParsedRange:
        if not range_text.strip():
            return ParsedRange.any(raw=range_text)
        return super().parse_range(range_text, configuration)

    def _bracket_sets(self, text: str) -> list[str]:
        sets = _BRACKET_SET.findall(text)
        leftover = _BRACKET_SET.sub("", text).replace(",", "").strip()
        if not sets or leftover:
            raise InvalidRangeError(text, "Invalid Maven range notation")
        return sets

    def _normalize_bracket_set(self, bracket_set: str, raw: str) -> str:
        lower_inclusive = bracket_set[0] == "["
        upper_inclusive = bracket_set[-1] == "]"
        inner = bracket_set[1:-1]

        if "," not in inner:
            # [1.0] is an exact requirement; (1.0) means nothing.
            if not inner.strip() or not (lower_inclusive and upper_inclusive):
                raise InvalidRangeError(raw, f"Invalid Maven range notation: {bracket_set}")
            return "=" + self.normalize_version(inner)

        lower_text, _, upper_text = (part.strip() for part in inner.partition(","))
        if "," in upper_text:
            raise InvalidRangeError(raw, f"Too many bounds in {bracket_set}")

        constraints = []
        if lower_text:
            operator = ">=" if lower_inclusive else ">"
            constraints.append(operator + self.normalize_version(lower_text))
        if upper_text:
            operator = "<=" if upper_inclusive else "<"
            constraints.append(operator + self.normalize_version(upper_text))
        if not constraints:
            raise InvalidRangeError(raw, f"Range {bracket_set} has no bounds")
        return " ".join(constraints)

    def _normalize_token(self, token: str) -> str:
        match = _TOKEN.match(token)
        if not match or token in ("||", "-"):
            return token
        return (match.group("operator") or "") + self.normalize_version(match.group("version"))
