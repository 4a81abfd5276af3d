"""Go modules dialect: versions always carry a "v" prefix."""

from __future__ import annotations

from ..config import SieveConfiguration
from ..errors import InvalidVersionError
from ..models import ParsedVersion
from .base import Dialect


class GoModDialect(Dialect):
    name = "gomod"
    display_name = "Go modules"
    supported_operators = ("=", "!=", ">", ">=", "<", "<=")
    option_overrides = {"allow_v_prefix": True}

    def parse_version(
        self, version: str, configuration: SieveConfiguration | None = None
    ) -> ParsedVersion:
        if not version.strip().startswith("v"):
            raise InvalidVersionError(version, "Go module version must start with 'v'")
        return super().parse_version(version, configuration)
