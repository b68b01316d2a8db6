"""MetricsRenderer protocol for serving a scrape.

Separates the scrape handler (HTTP glue, outside this package) from
negotiation and serialization: the handler passes the Accept header in and
gets a Content-Type and body back.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RenderedMetrics:
    """Serialized scrape output."""

    content_type: str
    body: bytes


@runtime_checkable
class MetricsRenderer(Protocol):
    """Protocol for rendering collected metrics into a negotiated format."""

    def render(self, accept: str | None) -> RenderedMetrics:
        """Negotiate a format for ``accept`` and serialize all collected metrics."""
        ...
