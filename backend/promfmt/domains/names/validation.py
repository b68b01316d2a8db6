"""Metric and label name validation.

``is_valid_legacy_metric_name`` always applies the legacy character rules.
``is_valid_metric_name`` follows the configured ValidationScheme.
"""

from __future__ import annotations

from promfmt.core.config import CodecSettings, get_settings
from promfmt.core.exceptions import InvariantViolationError
from promfmt.domains.names.types import ValidationScheme


def is_legacy_valid_char(ch: str, index: int) -> bool:
    """Whether ``ch`` may appear at ``index`` of a legacy name."""
    return (
        ("a" <= ch <= "z")
        or ("A" <= ch <= "Z")
        or ch == "_"
        or ch == ":"
        or ("0" <= ch <= "9" and index > 0)
    )


def is_valid_legacy_metric_name(name: str) -> bool:
    """Check ``name`` against ``^[a-zA-Z_:][a-zA-Z0-9_:]*$`` without a regex."""
    if not name:
        return False
    for i, ch in enumerate(name):
        if not is_legacy_valid_char(ch, i):
            return False
    return True


def is_valid_utf8(name: str) -> bool:
    """Whether ``name`` encodes to strict UTF-8 (no lone surrogates)."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class NameValidator:
    """Validates names under one settings object.

    Built once at startup and shared; holds no mutable state.
    """

    def __init__(self, settings: CodecSettings) -> None:
        self._settings = settings

    @property
    def validation_scheme(self) -> ValidationScheme:
        return self._settings.validation_scheme

    def is_valid_metric_name(self, name: str) -> bool:
        """Validate ``name`` under the configured scheme.

        Raises:
            InvariantViolationError: if the scheme is not a known ValidationScheme.
        """
        return _is_valid_metric_name(name, self._settings.validation_scheme)


def is_valid_metric_name(name: str, settings: CodecSettings | None = None) -> bool:
    """Validate ``name`` under the process-wide (or given) validation scheme."""
    settings = settings or get_settings()
    return _is_valid_metric_name(name, settings.validation_scheme)


def _is_valid_metric_name(name: str, scheme: ValidationScheme) -> bool:
    if scheme == ValidationScheme.LEGACY_VALIDATION:
        return is_valid_legacy_metric_name(name)
    if scheme == ValidationScheme.UTF8_VALIDATION:
        if not name:
            return False
        return is_valid_utf8(name)
    raise InvariantViolationError(f"Invalid name validation scheme requested: {scheme!r}")
