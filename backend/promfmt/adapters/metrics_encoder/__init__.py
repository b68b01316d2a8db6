"""Metrics encoder adapters."""

from promfmt.adapters.metrics_encoder.fake import FakeMetricsEncoder
from promfmt.adapters.metrics_encoder.prometheus import PrometheusMetricsEncoder

__all__ = ["PrometheusMetricsEncoder", "FakeMetricsEncoder"]
