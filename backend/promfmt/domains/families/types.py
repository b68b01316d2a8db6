"""Metric family data model.

Mirrors the exposition data model (MetricFamily -> Metric -> LabelPair plus
one typed sample payload). All types are frozen and sequences are tuples, so
transformed families can share unchanged sub-objects with their input.
Optional fields are None when unset.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MetricType(str, Enum):
    """Declared type of a metric family."""

    COUNTER = "counter"
    GAUGE = "gauge"
    SUMMARY = "summary"
    UNTYPED = "untyped"
    HISTOGRAM = "histogram"


@dataclass(frozen=True)
class LabelPair:
    """A single label name/value pair."""

    name: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class Counter:
    value: float | None = None


@dataclass(frozen=True)
class Gauge:
    value: float | None = None


@dataclass(frozen=True)
class Untyped:
    value: float | None = None


@dataclass(frozen=True)
class Quantile:
    quantile: float
    value: float


@dataclass(frozen=True)
class Summary:
    sample_count: int | None = None
    sample_sum: float | None = None
    quantile: tuple[Quantile, ...] = ()


@dataclass(frozen=True)
class Bucket:
    upper_bound: float
    cumulative_count: int


@dataclass(frozen=True)
class Histogram:
    sample_count: int | None = None
    sample_sum: float | None = None
    bucket: tuple[Bucket, ...] = ()


@dataclass(frozen=True)
class Metric:
    """One labelled instance within a family.

    Exactly one payload field is expected to be set.
    """

    label: tuple[LabelPair, ...] = ()
    counter: Counter | None = None
    gauge: Gauge | None = None
    summary: Summary | None = None
    untyped: Untyped | None = None
    histogram: Histogram | None = None
    timestamp_ms: int | None = None


@dataclass(frozen=True)
class MetricFamily:
    """A named metric with its help text, type and instances."""

    name: str | None = None
    help: str | None = None
    type: MetricType | None = None
    metric: tuple[Metric, ...] = ()
