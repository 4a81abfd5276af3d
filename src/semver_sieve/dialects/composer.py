"""Composer dialect.

See https://getcomposer.org/doc/articles/versions.md. Differences from the
generic grammar:
- stability flags (@stable, @dev ...) are dropped
- inline aliases ("dev-main as 1.0.x-dev") resolve to the alias
- dev branches ("dev-feature") sort above every release
- "|" is an alias for "||" and "," separates AND constraints
- the pessimistic operator "~>" behaves like "~"
"""

from __future__ import annotations

import re

from .base import Dialect

DEV_BRANCH_VERSION = "999999.999999.999999-dev"

_STABILITY_FLAG = re.compile(r"@(stable|dev|alpha|beta|RC)(?=$|[\s,|])", re.IGNORECASE)
_SINGLE_PIPE = re.compile(r"(?<!\|)\|(?!\|)")
_INLINE_ALIAS = re.compile(r"\s+as\s+[^\s,|]+")
_COMMA = re.compile(r"\s*,\s*")
_DEV_BRANCH = re.compile(r"(?<![^\s,|<>=!~^])dev-[^\s,|]+")


class ComposerDialect(Dialect):
    name = "composer"
    display_name = "Composer"
    supported_operators = (
        "=",
        "==",
        "!=",
        "<",
        "<=",
        ">",
        ">=",
        "^",
        "~",
        "~>",  # Pessimistic operator
        "-",
        "||",
        "|",  # OR (Composer alias)
        ",",  # AND (Composer alias)
        "x",
        "*",
        "as",  # Inline alias
    )
    option_overrides = {
        "strict_segments": False,
        "allow_v_prefix": True,
        "allow_leading_zeros": False,
        "custom_operators": {"~>": "~"},
    }

    def normalize_version(self, version: str) -> str:
        text = _STABILITY_FLAG.sub("", version.strip())

        if " as " in text:
            _, alias = text.split(" as ", 1)
            text = alias.strip()

        if text.startswith("dev-"):
            return DEV_BRANCH_VERSION

        return text.strip()

    def normalize_range(self, range_text: str) -> str:
        text = _SINGLE_PIPE.sub("||", range_text.strip())
        text = _INLINE_ALIAS.sub("", text)
        text = _DEV_BRANCH.sub(DEV_BRANCH_VERSION, text)
        text = _STABILITY_FLAG.sub("", text)
        text = "||".join(_COMMA.sub(" ", part.strip()) for part in text.split("||"))
        return text.strip()
