"""Single comparison constraint model."""

from __future__ import annotations

from dataclasses import dataclass

from .parsed_version import ParsedVersion

OPERATORS = ("<", "<=", ">", ">=", "=", "!=")
OPERATOR_ALIASES = {"==": "=", "!==": "!="}

_PRERELEASE_OPERATORS = {">", ">="}


@dataclass(frozen=True)
class VersionConstraint:
    """An operator applied to a target version, e.g. ``>=1.2.3``.

    ``exclusive_floor`` marks the target as the lowest version of its core,
    below every prerelease of it. ``<2.0.0`` with the flag therefore rejects
    ``2.0.0-alpha``; it is written out as ``<2.0.0-0``.
    """

    operator: str
    version: ParsedVersion
    exclusive_floor: bool = False

    def __post_init__(self) -> None:
        operator = OPERATOR_ALIASES.get(self.operator, self.operator)
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported operator: {self.operator}")
        object.__setattr__(self, "operator", operator)

    def __str__(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        target = self.version.to_normalized_string()
        if self.exclusive_floor:
            target += "-0"
        return f"{self.operator}{target}"

    @property
    def targets_prerelease(self) -> bool:
        return self.version.is_prerelease or self.exclusive_floor

    def allows_prereleases(self) -> bool:
        return self.targets_prerelease or self.operator in _PRERELEASE_OPERATORS

    def to_dict(self) -> dict[str, object]:
        return {
            "operator": self.operator,
            "version": self.version.to_normalized_string(),
            "exclusiveFloor": self.exclusive_floor,
        }

    @classmethod
    def upper_floor(cls, version: ParsedVersion) -> VersionConstraint:
        """Exclusive upper bound below every prerelease of ``version``."""
        return cls(operator="<", version=version, exclusive_floor=True)
