"""Exceptions raised by promfmt.

``InvariantViolationError`` marks programming errors (an out-of-range enum
reaching the codec). It is never caught inside the package and callers should
not treat it as a recoverable result.
"""


class PromfmtError(Exception):
    """Base class for promfmt errors."""


class InvariantViolationError(PromfmtError, RuntimeError):
    """Hard error raised when an unrecognized scheme value reaches the codec."""


class SettingsAlreadyConfiguredError(PromfmtError):
    """Raised when process-wide settings are installed twice with different values."""


class UnsupportedFormatError(PromfmtError):
    """Raised by an encoder that cannot serialize the requested format."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"Cannot encode metrics as '{fmt}'")
        self.fmt = fmt


class InvalidMetricFamilyError(PromfmtError, ValueError):
    """Raised by an encoder when a family cannot be written, e.g. it has no name."""
