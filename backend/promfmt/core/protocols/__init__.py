"""Core protocols for dependency injection."""

from promfmt.core.protocols.metrics_encoder import MetricsEncoder
from promfmt.core.protocols.metrics_renderer import MetricsRenderer, RenderedMetrics

__all__ = [
    "MetricsEncoder",
    "MetricsRenderer",
    "RenderedMetrics",
]
