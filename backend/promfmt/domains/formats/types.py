"""Content types of the exposition wire protocols.

Consumers compare format strings, so parameter order and spacing of the
constants below are part of the wire contract. Do not build format strings by
hand; use the negotiator or these constants.
"""

from enum import Enum
from typing import NewType

Format = NewType("Format", str)

TEXT_VERSION_1_0_0 = "1.0.0"
TEXT_VERSION_0_0_4 = "0.0.4"
TEXT_TYPE = "text/plain"
PROTO_TYPE = "application/vnd.google.protobuf"
PROTO_PROTOCOL = "io.prometheus.client.MetricFamily"
PROTO_FMT = PROTO_TYPE + "; proto=" + PROTO_PROTOCOL + ";"
UTF8_VALID = "utf8"
OPENMETRICS_TYPE = "application/openmetrics-text"
OPENMETRICS_VERSION_2_0_0 = "2.0.0"
OPENMETRICS_VERSION_1_0_0 = "1.0.0"
OPENMETRICS_VERSION_0_0_1 = "0.0.1"

# Parameter keys.
PROTO_KEY = "proto"
ENCODING_KEY = "encoding"
VERSION_KEY = "version"
CHARSET_KEY = "charset"
ESCAPING_KEY = "escaping"
VALID_CHARS_KEY = "validchars"
VALIDATION_SCHEME_KEY = "validation-scheme"

FMT_UNKNOWN = Format("<unknown>")
FMT_TEXT_0_0_4 = Format(TEXT_TYPE + "; version=" + TEXT_VERSION_0_0_4 + "; charset=utf-8")
FMT_TEXT_1_0_0 = Format(TEXT_TYPE + "; version=" + TEXT_VERSION_1_0_0 + "; charset=utf-8")
FMT_PROTO_DELIM = Format(PROTO_FMT + " encoding=delimited")
FMT_PROTO_TEXT = Format(PROTO_FMT + " encoding=text")
FMT_PROTO_COMPACT = Format(PROTO_FMT + " encoding=compact-text")
FMT_OPENMETRICS_0_0_1 = Format(
    OPENMETRICS_TYPE + "; version=" + OPENMETRICS_VERSION_0_0_1 + "; charset=utf-8"
)
FMT_OPENMETRICS_1_0_0 = Format(
    OPENMETRICS_TYPE + "; version=" + OPENMETRICS_VERSION_1_0_0 + "; charset=utf-8"
)
FMT_OPENMETRICS_2_0_0 = Format(
    OPENMETRICS_TYPE + "; version=" + OPENMETRICS_VERSION_2_0_0 + "; charset=utf-8"
)

# UTF-8 and escaping parameters.
FMT_UTF8_PARAM = "; validchars=utf8"
FMT_ESCAPE_NONE = Format("none")
FMT_ESCAPE_UNDERSCORES = Format("underscores")
FMT_ESCAPE_DOTS = Format("dots")
FMT_ESCAPE_VALUES = Format("values")


class FormatType(str, Enum):
    """Wire protocol family a format string belongs to."""

    UNKNOWN = "unknown"
    PROTO_COMPACT = "proto_compact"
    PROTO_DELIM = "proto_delim"
    PROTO_TEXT = "proto_text"
    TEXT_PLAIN = "text_plain"
    OPEN_METRICS = "open_metrics"
