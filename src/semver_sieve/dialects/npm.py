"""npm dialect.

Adds dist-tags (``latest``, ``next`` ...) and the ``workspace:`` protocol on
top of the generic grammar. An empty range means any version, as in
package.json.
"""

from __future__ import annotations

from ..config import SieveConfiguration
from ..models import ParsedRange, ParsedVersion
from .base import Dialect

WORKSPACE_PREFIX = "workspace:"

# Dist-tags map to sentinel versions so they still order against real releases.
SPECIAL_TAGS: dict[str, ParsedVersion] = {
    "latest": ParsedVersion(999999, 999999, 999999, build=("npm-tag", "latest"), raw="latest"),
    "next": ParsedVersion(999999, 999999, 999998, build=("npm-tag", "next"), raw="next"),
    **{
        tag: ParsedVersion(0, 0, 0, prerelease=(tag, "999999"), raw=tag)
        for tag in ("alpha", "beta", "rc", "canary", "experimental", "dev", "nightly")
    },
}


class NpmDialect(Dialect):
    name = "npm"
    display_name = "npm"
    supported_operators = (
        "=",
        "!=",
        ">",
        ">=",
        "<",
        "<=",
        "^",
        "~",
        "||",
        " ",
        "workspace:",
        "x",
        "X",
        "*",
    )
    option_overrides = {
        "allow_v_prefix": True,
        "strict_segments": False,
        "case_insensitive": True,
    }

    def is_special_tag(self, version: str) -> bool:
        return version.strip() in SPECIAL_TAGS

    def is_workspace_range(self, range_text: str) -> bool:
        return range_text.strip().startswith(WORKSPACE_PREFIX)

    def parse_version(
        self, version: str, configuration: SieveConfiguration | None = None
    ) -> ParsedVersion:
        tag = SPECIAL_TAGS.get(version.strip())
        if tag is not None:
            return tag
        return super().parse_version(version, configuration)

    def parse_range(
        self, range_text: str, configuration: SieveConfiguration | None = None
    ) -> ParsedRange:
        if not self.normalize_range(range_text):
            return ParsedRange.any(raw=range_text)
        return super().parse_range(range_text, configuration)

    def normalize_range(self, range_text: str) -> str:
        text = range_text.strip()
        if text.startswith(WORKSPACE_PREFIX):
            text = text[len(WORKSPACE_PREFIX) :].strip()
            # workspace:^ and workspace:~ pin to the local package version.
            if text in ("", "^", "~"):
                text = "*"
        return text
