"""promfmt - name escaping and content negotiation for Prometheus exposition formats."""

from promfmt.core.config import CodecSettings, configure, get_settings
from promfmt.core.exceptions import (
    InvalidMetricFamilyError,
    InvariantViolationError,
    PromfmtError,
    SettingsAlreadyConfiguredError,
    UnsupportedFormatError,
)
from promfmt.domains.families.escaping import escape_metric_family
from promfmt.domains.formats.accept import AcceptOffer, parse_accept
from promfmt.domains.formats.negotiation import (
    FormatNegotiator,
    escaping_scheme_to_format,
    format_to_escaping_scheme,
    format_type,
    negotiate,
    negotiate_including_openmetrics,
)
from promfmt.domains.formats.types import Format, FormatType
from promfmt.domains.names.escaping import escape_name
from promfmt.domains.names.types import METRIC_NAME_LABEL, EscapingScheme, ValidationScheme
from promfmt.domains.names.validation import (
    NameValidator,
    is_valid_legacy_metric_name,
    is_valid_metric_name,
)

__all__ = [
    "METRIC_NAME_LABEL",
    "AcceptOffer",
    "CodecSettings",
    "EscapingScheme",
    "Format",
    "FormatNegotiator",
    "FormatType",
    "InvalidMetricFamilyError",
    "InvariantViolationError",
    "NameValidator",
    "PromfmtError",
    "SettingsAlreadyConfiguredError",
    "UnsupportedFormatError",
    "ValidationScheme",
    "configure",
    "escape_metric_family",
    "escape_name",
    "escaping_scheme_to_format",
    "format_to_escaping_scheme",
    "format_type",
    "get_settings",
    "is_valid_legacy_metric_name",
    "is_valid_metric_name",
    "negotiate",
    "negotiate_including_openmetrics",
    "parse_accept",
]
