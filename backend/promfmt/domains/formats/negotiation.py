"""Content negotiation for metrics exposition.

The negotiator walks Accept offers in preference order and picks the first
one it can serve, in this priority per offer:

1. protobuf (delimited, text or compact-text encoding),
2. OpenMetrics 0.0.1 / 1.0.0 / 2.0.0, only when requested by the caller;
   any other OpenMetrics version is served as text 0.0.4,
3. text/plain 1.0.0, otherwise text/plain 0.0.4.

If nothing matches, text 0.0.4 is returned. The chosen format is then
annotated with either ``validchars=utf8`` (requested by the offer via
``validation-scheme=utf8`` and supported by the format) or
``escaping=<token>`` (from the offer, else the configured default).
"""

from __future__ import annotations

from dataclasses import dataclass

from promfmt.core.config import CodecSettings, get_settings
from promfmt.core.exceptions import InvariantViolationError
from promfmt.core.logging import logger
from promfmt.domains.formats.accept import AcceptOffer, parse_accept
from promfmt.domains.formats.types import (
    CHARSET_KEY,
    ENCODING_KEY,
    ESCAPING_KEY,
    FMT_ESCAPE_DOTS,
    FMT_ESCAPE_NONE,
    FMT_ESCAPE_UNDERSCORES,
    FMT_ESCAPE_VALUES,
    FMT_OPENMETRICS_0_0_1,
    FMT_OPENMETRICS_1_0_0,
    FMT_OPENMETRICS_2_0_0,
    FMT_PROTO_COMPACT,
    FMT_PROTO_DELIM,
    FMT_PROTO_TEXT,
    FMT_TEXT_0_0_4,
    FMT_TEXT_1_0_0,
    FMT_UTF8_PARAM,
    OPENMETRICS_TYPE,
    OPENMETRICS_VERSION_0_0_1,
    OPENMETRICS_VERSION_1_0_0,
    OPENMETRICS_VERSION_2_0_0,
    PROTO_KEY,
    PROTO_PROTOCOL,
    PROTO_TYPE,
    TEXT_TYPE,
    TEXT_VERSION_1_0_0,
    UTF8_VALID,
    VALID_CHARS_KEY,
    VALIDATION_SCHEME_KEY,
    VERSION_KEY,
    Format,
    FormatType,
)
from promfmt.domains.names.types import EscapingScheme


@dataclass(frozen=True)
class _Capability:
    """A format this package can negotiate, and whether it carries UTF-8 names."""

    fmt: Format
    supports_utf8: bool


_TEXT_0_0_4 = _Capability(FMT_TEXT_0_0_4, supports_utf8=False)

_PROTO_ENCODINGS: dict[str, _Capability] = {
    "delimited": _Capability(FMT_PROTO_DELIM, supports_utf8=True),
    "text": _Capability(FMT_PROTO_TEXT, supports_utf8=True),
    "compact-text": _Capability(FMT_PROTO_COMPACT, supports_utf8=True),
}

_OPENMETRICS_VERSIONS: dict[str, _Capability] = {
    "": _Capability(FMT_OPENMETRICS_0_0_1, supports_utf8=False),
    OPENMETRICS_VERSION_0_0_1: _Capability(FMT_OPENMETRICS_0_0_1, supports_utf8=False),
    OPENMETRICS_VERSION_1_0_0: _Capability(FMT_OPENMETRICS_1_0_0, supports_utf8=False),
    OPENMETRICS_VERSION_2_0_0: _Capability(FMT_OPENMETRICS_2_0_0, supports_utf8=True),
}

_TEXT_VERSIONS: dict[str, _Capability] = {
    TEXT_VERSION_1_0_0: _Capability(FMT_TEXT_1_0_0, supports_utf8=True),
}

_SCHEME_TOKENS: dict[EscapingScheme, Format] = {
    EscapingScheme.NO_ESCAPING: FMT_ESCAPE_NONE,
    EscapingScheme.UNDERSCORE_ESCAPING: FMT_ESCAPE_UNDERSCORES,
    EscapingScheme.DOTS_ESCAPING: FMT_ESCAPE_DOTS,
    EscapingScheme.VALUE_ENCODING_ESCAPING: FMT_ESCAPE_VALUES,
}

_TOKEN_SCHEMES: dict[str, EscapingScheme] = {
    token: scheme for scheme, token in _SCHEME_TOKENS.items()
}


def escaping_scheme_to_format(scheme: EscapingScheme) -> Format:
    """Return the ``escaping=`` token for ``scheme``.

    Raises:
        InvariantViolationError: if ``scheme`` is not a known EscapingScheme.
    """
    token = _SCHEME_TOKENS.get(scheme) if isinstance(scheme, EscapingScheme) else None
    if token is None:
        raise InvariantViolationError(f"unknown escaping scheme {scheme!r}")
    return token


def _scheme_for_token(token: str) -> EscapingScheme:
    try:
        return _TOKEN_SCHEMES[token]
    except KeyError:
        raise InvariantViolationError(f"unknown format scheme {token}") from None


def format_to_escaping_scheme(fmt: str, settings: CodecSettings | None = None) -> EscapingScheme:
    """Recover the escaping scheme recorded in a negotiated format string.

    ``validchars=utf8`` means names are sent as-is. Without either parameter the
    configured default escaping scheme applies.

    Raises:
        InvariantViolationError: if the ``escaping`` token is unknown.
    """
    for part in fmt.split(";"):
        toks = part.split("=")
        if len(toks) != 2:
            continue
        key, value = toks[0].strip(), toks[1].strip()
        if key == VALID_CHARS_KEY and value == UTF8_VALID:
            return EscapingScheme.NO_ESCAPING
        if key == ESCAPING_KEY:
            return _scheme_for_token(value)
    return (settings or get_settings()).name_escaping_scheme


def format_type(fmt: str) -> FormatType:
    """Classify a format string by wire protocol."""
    toks = fmt.split(";")
    if len(toks) < 2:
        return FormatType.UNKNOWN

    params: dict[str, str] = {}
    for tok in toks[1:]:
        args = tok.split("=")
        if len(args) != 2:
            continue
        params[args[0].strip()] = args[1].strip()

    media_type = toks[0].strip()
    if media_type == PROTO_TYPE:
        if params.get(PROTO_KEY) != PROTO_PROTOCOL:
            return FormatType.UNKNOWN
        return {
            "delimited": FormatType.PROTO_DELIM,
            "text": FormatType.PROTO_TEXT,
            "compact-text": FormatType.PROTO_COMPACT,
        }.get(params.get(ENCODING_KEY, ""), FormatType.UNKNOWN)
    if media_type == OPENMETRICS_TYPE:
        if params.get(CHARSET_KEY) != "utf-8":
            return FormatType.UNKNOWN
        return FormatType.OPEN_METRICS
    if media_type == TEXT_TYPE:
        if params.get(CHARSET_KEY) != "utf-8":
            return FormatType.UNKNOWN
        return FormatType.TEXT_PLAIN
    return FormatType.UNKNOWN


class FormatNegotiator:
    """Chooses the exposition format and name escaping for a request.

    Holds one settings object for its lifetime; safe to share between
    concurrent requests.
    """

    def __init__(self, settings: CodecSettings) -> None:
        self._settings = settings
        self._logger = logger.with_context(component="format_negotiator")

    @property
    def settings(self) -> CodecSettings:
        return self._settings

    def negotiate(self, accept: str | None, *, include_openmetrics: bool = False) -> Format:
        """Pick a format for an Accept header value.

        Args:
            accept: Raw Accept header value. None or empty means no preference.
            include_openmetrics: Whether OpenMetrics offers may be served.

        Returns:
            The negotiated format, always ending in a ``validchars`` or
            ``escaping`` parameter.
        """
        for offer in parse_accept(accept):
            capability = self._match(offer, include_openmetrics)
            if capability is not None:
                return self._annotate(capability, offer)

        self._logger.debug(f"No acceptable offer in {accept!r}, serving text {FMT_TEXT_0_0_4}")
        return self._escaped(_TEXT_0_0_4.fmt, self._settings.name_escaping_scheme)

    def to_escaping_scheme(self, fmt: str) -> EscapingScheme:
        """Escaping scheme recorded in ``fmt``, defaulting to this negotiator's settings."""
        return format_to_escaping_scheme(fmt, self._settings)

    def _match(self, offer: AcceptOffer, include_openmetrics: bool) -> _Capability | None:
        escaping = offer.params.get(ESCAPING_KEY)
        if escaping is not None and escaping not in _TOKEN_SCHEMES:
            self._logger.debug(
                f"Skipping {offer.media_type} offer with unknown escaping {escaping!r}"
            )
            return None

        if offer.media_type == PROTO_TYPE:
            if offer.params.get(PROTO_KEY) != PROTO_PROTOCOL:
                return None
            return _PROTO_ENCODINGS.get(offer.params.get(ENCODING_KEY, ""))

        if offer.media_type == OPENMETRICS_TYPE:
            if not include_openmetrics:
                return None
            version = offer.params.get(VERSION_KEY, "")
            capability = _OPENMETRICS_VERSIONS.get(version)
            if capability is None:
                self._logger.debug(f"OpenMetrics version {version!r} unsupported, serving text")
                return _TEXT_0_0_4
            return capability

        if offer.media_type == TEXT_TYPE:
            return _TEXT_VERSIONS.get(offer.params.get(VERSION_KEY, ""), _TEXT_0_0_4)

        return None

    def _annotate(self, capability: _Capability, offer: AcceptOffer) -> Format:
        if offer.params.get(VALIDATION_SCHEME_KEY) == UTF8_VALID:
            if capability.supports_utf8:
                return Format(capability.fmt + FMT_UTF8_PARAM)
            self._logger.debug(f"UTF-8 names not supported by {capability.fmt}, escaping instead")

        token = offer.params.get(ESCAPING_KEY)
        if token is None:
            return self._escaped(capability.fmt, self._settings.name_escaping_scheme)
        return self._escaped(capability.fmt, _scheme_for_token(token))

    def _escaped(self, fmt: Format, scheme: EscapingScheme) -> Format:
        return Format(f"{fmt}; {ESCAPING_KEY}={escaping_scheme_to_format(scheme)}")


def negotiate(accept: str | None) -> Format:
    """Negotiate among protobuf and text formats using the process-wide settings."""
    return FormatNegotiator(get_settings()).negotiate(accept)


def negotiate_including_openmetrics(accept: str | None) -> Format:
    """Like ``negotiate`` but OpenMetrics offers may be served too."""
    return FormatNegotiator(get_settings()).negotiate(accept, include_openmetrics=True)
