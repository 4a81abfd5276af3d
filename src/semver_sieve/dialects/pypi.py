"""PyPI (PEP 440) dialect.

Versions and specifiers are read with ``packaging`` and rewritten to the
SemVer grammar:

- ``1.0a1`` / ``1.0b2`` / ``1.0rc3`` become ``1.0.0-alpha.1`` / ``-beta.2`` / ``-rc.3``
- dev releases sort below every other prerelease: ``1.0.dev4`` -> ``1.0.0-0.dev.4``
- post releases and local labels are kept as build metadata, so they compare
  equal to the release they follow
- release segments past the third are build metadata too
- epochs other than 0 have no SemVer equivalent and are rejected

Specifier lists (``>=1.0,<2.0``) are AND-ed. ``~=`` expands to its compatible
release range, ``==1.2.*`` to a prefix range and ``===`` to plain equality.
"""

from __future__ import annotations

import re

from packaging.specifiers import InvalidSpecifier, Specifier
from packaging.version import InvalidVersion, Version

from ..errors import InvalidRangeError, InvalidVersionError
from .base import Dialect

PRERELEASE_LABELS = {"a": "alpha", "b": "beta", "rc": "rc"}

_HAS_OPERATOR = re.compile(r"^(~=|===|==|!=|<=|>=|<|>)")


def _floor(release: tuple[int, ...]) -> str:
    """Lowest version starting with ``release``, below all of its prereleases."""
    return ".".join(str(n) for n in (*release, 0, 0)[:3]) + "-0"


def _bump(release: tuple[int, ...]) -> str:
    return _floor((*release[:-1], release[-1] + 1))


class PypiDialect(Dialect):
    name = "pypi"
    display_name = "PyPI"
    supported_operators = ("==", "!=", ">", ">=", "<", "<=", "~=", "===", ",", "*")
    option_overrides = {
        "strict_segments": False,
        "allow_v_prefix": True,
    }

    def normalize_version(self, version: str) -> str:
        text = version.strip()
        try:
            parsed = Version(text)
        except InvalidVersion as exc:
            raise InvalidVersionError(version, "Not a valid PEP 440 version") from exc

        if parsed.epoch:
            raise InvalidVersionError(version, "Version epochs are not supported")

        release = parsed.release
        core = [*release[:3]] + [0] * (3 - len(release[:3]))

        prerelease: list[str] = []
        if parsed.pre is not None:
            label, number = parsed.pre
            prerelease += [PRERELEASE_LABELS[label], str(number)]
        if parsed.dev is not None:
            if not prerelease:
                prerelease.append("0")
            prerelease += ["dev", str(parsed.dev)]

        build: list[str] = []
        if len(release) > 3:
            build += ["segments", *(str(n) for n in release[3:])]
        if parsed.post is not None:
            build += ["post", str(parsed.post)]
        if parsed.local is not None:
            build += parsed.local.split(".")

        normalized = ".".join(str(n) for n in core)
        if prerelease:
            normalized += "-" + ".".join(prerelease)
        if build:
            normalized += "+" + ".".join(build)
        return normalized

    def normalize_range(self, range_text: str) -> str:
        text = range_text.strip()
        if text in ("", "*"):
            return text

        clauses = []
        for part in (p.strip() for p in text.split(",")):
            if not part:
                raise InvalidRangeError(range_text, "Empty clause in specifier list")
            clauses.append(self._translate(part, range_text))
        return " ".join(clauses)

    def _translate(self, clause: str, raw: str) -> str:
        if not _HAS_OPERATOR.match(clause):
            # A bare version is an exact pin.
            clause = "==" + clause

        try:
            specifier = Specifier(clause)
        except InvalidSpecifier as exc:
            raise InvalidRangeError(raw, f"Invalid PEP 440 specifier '{clause}'") from exc

        operator, version = specifier.operator, specifier.version

        if version.endswith(".*"):
            if operator != "==":
                raise InvalidRangeError(raw, f"Unsupported prefix match '{clause}'")
            # ==1.2.* := >=1.2.0-0 <1.3.0-0
            release = self._release(version[:-2], raw)
            if len(release) > 3:
                raise InvalidRangeError(raw, f"Prefix match '{clause}' is too deep")
            return f">={_floor(release)} <{_bump(release)}"

        if operator == "~=":
            # ~=1.4.5 := >=1.4.5 <1.5.0-0
            release = self._release(version, raw)
            if len(release) > 4:
                raise InvalidRangeError(raw, f"Compatible release '{clause}' is too deep")
            return f">={self._normalize(version, raw)} <{_bump(release[:-1])}"

        if operator == "===":
            operator = "="

        return operator + self._normalize(version, raw)

    def _normalize(self, version: str, raw: str) -> str:
        try:
            return self.normalize_version(version)
        except InvalidVersionError as exc:
            raise InvalidRangeError(raw, exc.reason) from exc

    def _release(self, version: str, raw: str) -> tuple[int, ...]:
        try:
            return Version(version).release
        except InvalidVersion as exc:
            raise InvalidRangeError(raw, f"Not a valid PEP 440 version: '{version}'") from exc
