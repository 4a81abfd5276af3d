"""Plain SemVer 2.0.0 dialect without ecosystem extensions."""

from __future__ import annotations

from .base import Dialect


class GenericSemverDialect(Dialect):
    name = "generic-semver"
    display_name = "Generic SemVer"
    supported_operators = (
        "=",  # Exact match
        "==",  # Exact match (alias)
        "!=",  # Not equal
        "!==",  # Not equal (alias)
        "<",
        "<=",
        ">",
        ">=",
        "^",  # Caret range (compatible within major)
        "~",  # Tilde range (compatible within minor)
        "-",  # Hyphen range (from - to)
        "||",
        "x",  # Wildcard
        "*",  # Wildcard (alias)
    )
