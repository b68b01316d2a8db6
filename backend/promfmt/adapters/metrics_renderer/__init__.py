"""Metrics renderer adapters."""

from promfmt.adapters.metrics_renderer.fake import FakeMetricsRenderer
from promfmt.adapters.metrics_renderer.prometheus import NegotiatingMetricsRenderer

__all__ = ["NegotiatingMetricsRenderer", "FakeMetricsRenderer"]
