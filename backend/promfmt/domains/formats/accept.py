"""Accept header parsing.

Parses RFC 7231 media ranges, e.g.

    application/vnd.google.protobuf;proto=io.prometheus.client.MetricFamily;q=0.7,
    text/plain;version=0.0.4;q=0.3

into offers ordered by preference: higher quality first, then more specific
media ranges (``*`` type or subtype last), then offers with more parameters.
Offers that tie keep their header order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

QUALITY_KEY = "q"
WILDCARD = "*"


@dataclass(frozen=True)
class AcceptOffer:
    """A single media range from an Accept header.

    ``params`` is a read-only view and is left out of the hash.
    """

    type: str
    subtype: str
    q: float = 1.0
    params: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def media_type(self) -> str:
        return f"{self.type}/{self.subtype}"


def parse_accept(header: str | None) -> list[AcceptOffer]:
    """Parse an Accept header into offers, most preferred first.

    Malformed media ranges and offers with a zero or unparsable quality are
    dropped. Type, subtype and parameter keys are lower-cased; parameter
    values keep their case and lose surrounding double quotes.
    """
    if not header:
        return []

    offers: list[AcceptOffer] = []
    for part in header.split(","):
        media_range, *raw_params = part.split(";")
        parsed = _parse_media_range(media_range)
        if parsed is None:
            continue

        q = 1.0
        params: dict[str, str] = {}
        for raw in raw_params:
            key, sep, value = raw.partition("=")
            if not sep:
                continue
            key = key.strip().lower()
            value = _unquote(value.strip())
            if key == QUALITY_KEY:
                q = _parse_quality(value)
            else:
                params[key] = value

        if not q > 0:  # also rejects NaN
            continue
        offers.append(AcceptOffer(type=parsed[0], subtype=parsed[1], q=q, params=params))

    return sorted(offers, key=_preference)


def _parse_media_range(media_range: str) -> tuple[str, str] | None:
    pieces = [p.strip() for p in media_range.strip().lower().split("/")]
    if len(pieces) == 1 and pieces[0] == WILDCARD:
        return WILDCARD, WILDCARD
    if len(pieces) == 2 and pieces[0] and pieces[1]:
        return pieces[0], pieces[1]
    return None


def _parse_quality(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _preference(offer: AcceptOffer) -> tuple[float, bool, bool, int]:
    return (-offer.q, offer.type == WILDCARD, offer.subtype == WILDCARD, -len(offer.params))
