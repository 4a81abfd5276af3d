"""Error taxonomy for version and range parsing."""

from __future__ import annotations


class SemverSieveError(ValueError):
    """Base error for every failure raised at the parsing boundary."""

    label = "input"

    def __init__(self, input: str, reason: str = "") -> None:
        self.input = input
        self.reason = reason
        message = f"Invalid {self.label}: '{input}'"
        if reason:
            message += f". {reason}"
        super().__init__(message)


class InvalidVersionError(SemverSieveError):
    """Raised when a version string cannot be parsed."""

    label = "version string"


class InvalidRangeError(SemverSieveError):
    """Raised when a range expression cannot be parsed."""

    label = "range string"


class ConfigurationError(SemverSieveError):
    """Raised when a configuration value or document is invalid."""

    label = "configuration option"
