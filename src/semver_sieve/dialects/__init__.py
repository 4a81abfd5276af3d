"""Ecosystem dialects and the registry that maps dialect ids to them."""

from __future__ import annotations

from .base import Dialect, DialectProtocol
from .composer import ComposerDialect
from .generic import GenericSemverDialect
from .gomod import GoModDialect
from .maven import MavenDialect
from .npm import NpmDialect
from .pypi import PypiDialect

DEFAULT_DIALECT_ID = GenericSemverDialect.name

DIALECTS: dict[str, type[Dialect]] = {
    dialect.name: dialect
    for dialect in (
        GenericSemverDialect,
        NpmDialect,
        ComposerDialect,
        MavenDialect,
        GoModDialect,
        PypiDialect,
    )
}


class UnknownDialectError(ValueError):
    """Raised when a dialect ID is not found in the registry."""


def get_dialect(dialect_id: str) -> Dialect:
    """Return a new dialect for the given ID, or raise UnknownDialectError."""
    dialect_class = DIALECTS.get(dialect_id)
    if dialect_class is None:
        known = ", ".join(get_known_dialect_ids())
        raise UnknownDialectError(f"Unknown dialect ID '{dialect_id}'. Known dialects: {known}")
    return dialect_class()


def get_known_dialect_ids() -> list[str]:
    """Return a sorted list of all registered dialect IDs."""
    return sorted(DIALECTS.keys())


__all__ = [
    "DEFAULT_DIALECT_ID",
    "DIALECTS",
    "ComposerDialect",
    "Dialect",
    "DialectProtocol",
    "GenericSemverDialect",
    "GoModDialect",
    "MavenDialect",
    "NpmDialect",
    "PypiDialect",
    "UnknownDialectError",
    "get_dialect",
    "get_known_dialect_ids",
]
