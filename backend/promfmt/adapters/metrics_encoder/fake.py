"""Fake MetricsEncoder for testing.

Records encode() calls so tests can assert on renderer behaviour
without depending on prometheus-client.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from promfmt.core.exceptions import UnsupportedFormatError
from promfmt.domains.families.types import MetricFamily
from promfmt.domains.formats.types import Format


@dataclass
class EncodeRecord:
    """Single observed encode call."""

    fmt: Format
    families: list[MetricFamily]


class FakeMetricsEncoder:
    """In-memory spy implementing the MetricsEncoder protocol.

    Usage:
        fake = FakeMetricsEncoder(unsupported={FMT_PROTO_DELIM})
        # … inject into a renderer …
        assert fake.calls[0].fmt.startswith("text/plain")
    """

    def __init__(
        self, output: bytes = b"# fake metrics\n", unsupported: Iterable[str] = ()
    ) -> None:
        self.output = output
        self.unsupported = {fmt.split(";")[0].strip() for fmt in unsupported}
        self.calls: list[EncodeRecord] = []

    def supports(self, fmt: Format) -> bool:
        return fmt.split(";")[0].strip() not in self.unsupported

    def encode(self, fmt: Format, families: Iterable[MetricFamily]) -> bytes:
        if not self.supports(fmt):
            raise UnsupportedFormatError(fmt)
        self.calls.append(EncodeRecord(fmt, list(families)))
        return self.output

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self.calls.clear()
