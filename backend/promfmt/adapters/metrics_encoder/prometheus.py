"""Prometheus implementation of the MetricsEncoder protocol.

Escapes each family as the negotiated format requires, converts it to
prometheus-client ``Metric`` objects and serializes them with the text or
OpenMetrics exposition writer. prometheus-client has no protobuf writer, so
protobuf formats are not supported here.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from prometheus_client.exposition import generate_latest as generate_text
from prometheus_client.metrics_core import Metric
from prometheus_client.openmetrics.exposition import ALLOWUTF8
from prometheus_client.openmetrics.exposition import generate_latest as generate_openmetrics
from prometheus_client.utils import floatToGoString

from promfmt.core.config import CodecSettings, get_settings
from promfmt.core.exceptions import InvalidMetricFamilyError, UnsupportedFormatError
from promfmt.core.logging import logger
from promfmt.domains.families.escaping import escape_metric_family
from promfmt.domains.families.types import Metric as FamilyMetric
from promfmt.domains.families.types import MetricFamily, MetricType
from promfmt.domains.formats.negotiation import format_to_escaping_scheme, format_type
from promfmt.domains.formats.types import (
    OPENMETRICS_VERSION_1_0_0,
    VERSION_KEY,
    Format,
    FormatType,
)
from promfmt.domains.names.types import METRIC_NAME_LABEL

_PROMETHEUS_TYPES = {
    MetricType.COUNTER: "counter",
    MetricType.GAUGE: "gauge",
    MetricType.SUMMARY: "summary",
    MetricType.UNTYPED: "unknown",
    MetricType.HISTOGRAM: "histogram",
}

_WRITABLE = frozenset({FormatType.TEXT_PLAIN, FormatType.OPEN_METRICS})


class _FamilyCollector:
    """Registry stand-in; the exposition writers only call ``collect()``."""

    def __init__(self, metrics: list[Metric]) -> None:
        self._metrics = metrics

    def collect(self) -> Iterator[Metric]:
        return iter(self._metrics)


def to_prometheus_metric(family: MetricFamily) -> Metric:
    """Convert a MetricFamily into a prometheus-client Metric.

    Counter families lose a trailing ``_total`` (prometheus-client adds it
    back on the sample). ``__name__`` labels are dropped; the family name is
    the sample name.

    Raises:
        InvalidMetricFamilyError: if the family has no name.
    """
    if not family.name:
        raise InvalidMetricFamilyError("metric family has no name")

    typ = _PROMETHEUS_TYPES.get(family.type, "unknown")
    name = family.name
    if typ == "counter" and name.endswith("_total"):
        name = name[: -len("_total")]

    metric = Metric(name, family.help or "", typ)
    for instance in family.metric:
        labels = {
            label.name: label.value or ""
            for label in instance.label
            if label.name and label.name != METRIC_NAME_LABEL
        }
        timestamp = instance.timestamp_ms / 1000 if instance.timestamp_ms is not None else None
        for suffix, extra, value in _samples(instance):
            metric.add_sample(name + suffix, {**labels, **extra}, value, timestamp)
    return metric


def _samples(instance: FamilyMetric) -> Iterator[tuple[str, dict[str, str], float]]:
    if instance.counter is not None:
        yield "_total", {}, instance.counter.value or 0.0
    elif instance.gauge is not None:
        yield "", {}, instance.gauge.value or 0.0
    elif instance.untyped is not None:
        yield "", {}, instance.untyped.value or 0.0
    elif instance.summary is not None:
        summary = instance.summary
        for q in summary.quantile:
            yield "", {"quantile": floatToGoString(q.quantile)}, q.value
        yield "_sum", {}, summary.sample_sum or 0.0
        yield "_count", {}, summary.sample_count or 0
    elif instance.histogram is not None:
        histogram = instance.histogram
        for b in histogram.bucket:
            yield "_bucket", {"le": floatToGoString(b.upper_bound)}, b.cumulative_count
        yield "_sum", {}, histogram.sample_sum or 0.0
        yield "_count", {}, histogram.sample_count or 0


class PrometheusMetricsEncoder:
    """Serialize metric families with prometheus-client's exposition writers.

    Names are escaped here, as the negotiated format asks, and handed to the
    writers with ``ALLOWUTF8`` so they are written as-is.

    Raises from ``encode``:
        UnsupportedFormatError: the format is not text or OpenMetrics.
        InvalidMetricFamilyError: a family has no name.
    """

    def __init__(self, settings: CodecSettings | None = None) -> None:
        self._settings = settings or get_settings()
        self._logger = logger.with_context(component="prometheus_metrics_encoder")

    def supports(self, fmt: Format) -> bool:
        return format_type(fmt) in _WRITABLE

    def encode(self, fmt: Format, families: Iterable[MetricFamily]) -> bytes:
        typ = format_type(fmt)
        if typ not in _WRITABLE:
            raise UnsupportedFormatError(fmt)

        scheme = format_to_escaping_scheme(fmt, self._settings)
        metrics = [to_prometheus_metric(escape_metric_family(f, scheme)) for f in families]
        self._logger.debug(f"Encoding {len(metrics)} families as {fmt}")

        collector = _FamilyCollector(metrics)
        if typ == FormatType.OPEN_METRICS:
            return generate_openmetrics(
                collector, escaping=ALLOWUTF8, version=_openmetrics_version(fmt)
            )
        return generate_text(collector, escaping=ALLOWUTF8)


def _openmetrics_version(fmt: Format) -> str:
    for part in fmt.split(";")[1:]:
        key, _, value = part.partition("=")
        if key.strip() == VERSION_KEY:
            return value.strip()
    return OPENMETRICS_VERSION_1_0_0
