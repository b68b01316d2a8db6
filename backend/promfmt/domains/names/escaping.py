"""Escaping of metric and label names for legacy consumers.

Schemes:
    NO_ESCAPING              identity.
    UNDERSCORE_ESCAPING      every illegal character becomes ``_``.
    DOTS_ESCAPING            ``_`` becomes ``__``, ``.`` becomes ``_dot_``, other
                             illegal characters become ``_``.
    VALUE_ENCODING_ESCAPING  ``U__`` prefix, illegal characters become
                             ``_<hex code point>_``.

Underscore and value encoding leave legacy-valid names untouched. Dots escaping
always rewrites underscores and dots, even in legacy-valid names.
"""

from __future__ import annotations

from promfmt.core.exceptions import InvariantViolationError
from promfmt.domains.names.types import EscapingScheme
from promfmt.domains.names.validation import is_legacy_valid_char, is_valid_legacy_metric_name

VALUE_ENCODING_PREFIX = "U__"
_INVALID_CODE_POINT = "_FFFD_"


def escape_name(name: str, scheme: EscapingScheme) -> str:
    """Escape ``name`` with ``scheme``. Does not validate the result.

    Raises:
        InvariantViolationError: if ``scheme`` is not a known EscapingScheme.
    """
    if not isinstance(scheme, EscapingScheme):
        raise InvariantViolationError(f"invalid escaping scheme {scheme!r}")
    if not name:
        return name
    if scheme == EscapingScheme.NO_ESCAPING:
        return name
    if scheme == EscapingScheme.UNDERSCORE_ESCAPING:
        if is_valid_legacy_metric_name(name):
            return name
        return "".join(ch if is_legacy_valid_char(ch, i) else "_" for i, ch in enumerate(name))
    if scheme == EscapingScheme.DOTS_ESCAPING:
        return "".join(_escape_dots_char(ch, i) for i, ch in enumerate(name))
    if scheme == EscapingScheme.VALUE_ENCODING_ESCAPING:
        if is_valid_legacy_metric_name(name):
            return name
        return VALUE_ENCODING_PREFIX + "".join(
            _escape_value_char(ch, i) for i, ch in enumerate(name)
        )
    raise InvariantViolationError(f"invalid escaping scheme {scheme!r}")


def _escape_dots_char(ch: str, index: int) -> str:
    if ch == "_":
        return "__"
    if ch == ".":
        return "_dot_"
    if is_legacy_valid_char(ch, index):
        return ch
    return "_"


def _escape_value_char(ch: str, index: int) -> str:
    if is_legacy_valid_char(ch, index):
        return ch
    code_point = ord(ch)
    # Lone surrogates stand in for bytes that were not valid UTF-8.
    if 0xD800 <= code_point <= 0xDFFF:
        return _INVALID_CODE_POINT
    return f"_{code_point:04x}_"
