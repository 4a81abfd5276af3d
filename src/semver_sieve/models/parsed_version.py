"""Parsed version model."""

from __future__ import annotations

from dataclasses import dataclass, replace
from collections.abc import Iterable


@dataclass(frozen=True)
class ParsedVersion:
    """Structured MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD] value.

    Dataclass equality compares every field, so two versions that only differ
    in ``build`` or ``raw`` are distinct values. Use the comparator for
    precedence, which ignores both.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()
    raw: str = ""

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise ValueError("Version numbers cannot be negative")

    def __str__(self) -> str:
        return self.to_full_string()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def has_build_metadata(self) -> bool:
        return bool(self.build)

    @property
    def core_version(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def to_normalized_string(self) -> str:
        """Return the version without build metadata."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += "-" + ".".join(self.prerelease)
        return version

    def to_full_string(self) -> str:
        version = self.to_normalized_string()
        if self.build:
            version += "+" + ".".join(self.build)
        return version

    def with_prerelease(self, prerelease: Iterable[str]) -> ParsedVersion:
        return replace(self, prerelease=tuple(prerelease))

    def with_build(self, build: Iterable[str]) -> ParsedVersion:
        return replace(self, build=tuple(build))

    def to_dict(self) -> dict[str, object]:
        return {
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "prerelease": list(self.prerelease),
            "build": list(self.build),
            "raw": self.raw,
        }

    @classmethod
    def from_core(
        cls,
        major: int,
        minor: int = 0,
        patch: int = 0,
        *,
        prerelease: Iterable[str] = (),
        build: Iterable[str] = (),
        raw: str = "",
    ) -> ParsedVersion:
        return cls(
            major=major,
            minor=minor,
            patch=patch,
            prerelease=tuple(prerelease),
            build=tuple(build),
            raw=raw,
        )
