"""Match report returned by the facade."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchReport:
    """Outcome of matching one version against a list of ranges."""

    matched: bool
    matched_ranges: tuple[str, ...]
    normalized_ranges: tuple[str, ...]

    def __bool__(self) -> bool:
        return self.matched

    def to_dict(self) -> dict[str, object]:
        return {
            "matched": self.matched,
            "matchedRanges": list(self.matched_ranges),
            "normalizedRanges": list(self.normalized_ranges),
        }
