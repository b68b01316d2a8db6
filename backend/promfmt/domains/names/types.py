"""Types for metric and label name handling."""

from enum import Enum

METRIC_NAME_LABEL = "__name__"
"""Reserved label key that carries a metric's own name."""


class ValidationScheme(str, Enum):
    """How metric and label names are validated.

    LEGACY_VALIDATION requires the legacy Prometheus character set
    (``[a-zA-Z_:][a-zA-Z0-9_:]*``). UTF8_VALIDATION only requires valid UTF-8.
    """

    LEGACY_VALIDATION = "legacy"
    UTF8_VALIDATION = "utf8"


class EscapingScheme(str, Enum):
    """How names are escaped for consumers that only accept legacy names.

    Values are the wire tokens used in ``escaping=<token>`` format parameters.
    """

    NO_ESCAPING = "none"
    UNDERSCORE_ESCAPING = "underscores"
    DOTS_ESCAPING = "dots"
    VALUE_ENCODING_ESCAPING = "values"
