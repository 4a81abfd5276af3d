"""Immutable value objects shared by the parsers and evaluators."""

from __future__ import annotations

from .match_report import MatchReport
from .parsed_range import ParsedRange, RangeLogic
from .parsed_version import ParsedVersion
from .version_constraint import OPERATOR_ALIASES, OPERATORS, VersionConstraint

__all__ = [
    "MatchReport",
    "OPERATORS",
    "OPERATOR_ALIASES",
    "ParsedRange",
    "ParsedVersion",
    "RangeLogic",
    "VersionConstraint",
]
