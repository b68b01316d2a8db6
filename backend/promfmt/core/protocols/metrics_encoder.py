"""MetricsEncoder protocol for byte-level serialization.

Negotiation decides *which* format to emit; an encoder turns metric families
into bytes of that format. Production uses prometheus-client's exposition
writers; tests inject a fake that records calls in memory.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from promfmt.domains.families.types import MetricFamily
from promfmt.domains.formats.types import Format


@runtime_checkable
class MetricsEncoder(Protocol):
    """Protocol for serializing metric families into a negotiated format."""

    def supports(self, fmt: Format) -> bool:
        """Whether ``encode`` can produce ``fmt``."""
        ...

    def encode(self, fmt: Format, families: Iterable[MetricFamily]) -> bytes:
        """Escape names as ``fmt`` requires and serialize ``families``.

        Args:
            fmt: A negotiated format string.
            families: Metric families with unescaped names.

        Raises:
            UnsupportedFormatError: if ``supports(fmt)`` is False.
        """
        ...
