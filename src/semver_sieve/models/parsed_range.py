"""Parsed range model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from collections.abc import Iterable

from .version_constraint import VersionConstraint


class RangeLogic(str, Enum):
    """How the constraint groups of a range combine."""

    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class ParsedRange:
    """A range as groups of AND-ed constraints.

    An AND range has at most one group; an OR range has one group per ``||``
    clause and is satisfied when any group is. The flattened ``constraints``
    view is derived from ``groups``.
    """

    groups: tuple[tuple[VersionConstraint, ...], ...]
    raw: str = ""
    logic: RangeLogic = RangeLogic.AND

    def __post_init__(self) -> None:
        if not isinstance(self.logic, RangeLogic):
            raise ValueError(f"Invalid logical operator: {self.logic}")
        if self.logic is RangeLogic.AND and len(self.groups) > 1:
            raise ValueError("AND ranges hold a single constraint group")
        if self.logic is RangeLogic.OR and not self.groups:
            raise ValueError("OR ranges need at least one constraint group")
        for group in self.groups:
            if any(not isinstance(c, VersionConstraint) for c in group):
                raise ValueError("All constraints must be VersionConstraint instances")

    def __str__(self) -> str:
        return self.to_normalized_string()

    @property
    def constraints(self) -> tuple[VersionConstraint, ...]:
        return tuple(c for group in self.groups for c in group)

    @property
    def constraint_groups(self) -> tuple[tuple[VersionConstraint, ...], ...] | None:
        if self.logic is RangeLogic.OR:
            return self.groups
        return None

    @property
    def has_constraints(self) -> bool:
        return any(self.groups)

    def allows_prereleases(self) -> bool:
        return any(c.allows_prereleases() for c in self.constraints)

    def first_constraint(self) -> VersionConstraint | None:
        constraints = self.constraints
        return constraints[0] if constraints else None

    def to_normalized_string(self) -> str:
        if not self.has_constraints:
            return "*"
        rendered = [" ".join(c.to_string() for c in group) or "*" for group in self.groups]
        return " || ".join(rendered)

    def with_additional_constraints(
        self, constraints: Iterable[VersionConstraint]
    ) -> ParsedRange:
        """Return an AND range extended with ``constraints``."""
        if self.logic is RangeLogic.OR:
            raise ValueError("Cannot append constraints to an OR range")
        return ParsedRange.all_of((*self.constraints, *constraints), raw=self.raw)

    def to_dict(self) -> dict[str, object]:
        return {
            "raw": self.raw,
            "logic": self.logic.value,
            "groups": [[c.to_dict() for c in group] for group in self.groups],
            "normalized": self.to_normalized_string(),
        }

    @classmethod
    def all_of(cls, constraints: Iterable[VersionConstraint], raw: str = "") -> ParsedRange:
        group = tuple(constraints)
        return cls(groups=(group,) if group else (), raw=raw)

    @classmethod
    def any_of(
        cls, groups: Iterable[Iterable[VersionConstraint]], raw: str = ""
    ) -> ParsedRange:
        return cls(
            groups=tuple(tuple(group) for group in groups),
            raw=raw,
            logic=RangeLogic.OR,
        )

    @classmethod
    def simple(cls, constraint: VersionConstraint, raw: str = "") -> ParsedRange:
        return cls.all_of((constraint,), raw=raw)

    @classmethod
    def any(cls, raw: str = "*") -> ParsedRange:
        """Range that matches every version."""
        return cls(groups=(), raw=raw)
