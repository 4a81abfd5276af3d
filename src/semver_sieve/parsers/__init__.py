"""Version and range parsers."""

from __future__ import annotations

from .range import RangeParser
from .version import VersionParser

__all__ = [
    "RangeParser",
    "VersionParser",
]
