"""Escaping of whole metric families.

``escape_metric_family`` never mutates its input. It returns the input itself
when nothing can change, and otherwise builds a new family that reuses every
metric, label pair and payload that did not need escaping.
"""

from __future__ import annotations

from dataclasses import replace
from typing import overload

from promfmt.domains.families.types import LabelPair, Metric, MetricFamily
from promfmt.domains.names.escaping import escape_name
from promfmt.domains.names.types import METRIC_NAME_LABEL, EscapingScheme
from promfmt.domains.names.validation import is_valid_legacy_metric_name


@overload
def escape_metric_family(family: None, scheme: EscapingScheme) -> None: ...


@overload
def escape_metric_family(family: MetricFamily, scheme: EscapingScheme) -> MetricFamily: ...


def escape_metric_family(
    family: MetricFamily | None, scheme: EscapingScheme
) -> MetricFamily | None:
    """Escape the family name and offending label names with ``scheme``.

    Args:
        family: Family to escape, or None.
        scheme: Escaping scheme. NO_ESCAPING returns ``family`` unchanged.

    Returns:
        ``family`` itself for None or NO_ESCAPING, otherwise a new family whose
        unchanged metrics are shared with ``family``.
    """
    if family is None:
        return None
    if scheme == EscapingScheme.NO_ESCAPING:
        return family

    if family.name is None or is_valid_legacy_metric_name(family.name):
        name = family.name
    else:
        name = escape_name(family.name, scheme)

    metrics = tuple(
        _escape_metric(m, scheme) if metric_needs_escaping(m) else m for m in family.metric
    )
    return MetricFamily(name=name, help=family.help, type=family.type, metric=metrics)


def metric_needs_escaping(metric: Metric) -> bool:
    """Whether any label *value* of ``metric`` is not a legacy-valid name."""
    return any(not is_valid_legacy_metric_name(label.value or "") for label in metric.label)


def _escape_metric(metric: Metric, scheme: EscapingScheme) -> Metric:
    return replace(metric, label=tuple(_escape_label(label, scheme) for label in metric.label))


def _escape_label(label: LabelPair, scheme: EscapingScheme) -> LabelPair:
    # The name label carries the metric name in its value; every other label
    # is escaped by name and keeps its value.
    if label.name == METRIC_NAME_LABEL:
        if label.value is None or is_valid_legacy_metric_name(label.value):
            return label
        return LabelPair(name=METRIC_NAME_LABEL, value=escape_name(label.value, scheme))
    if label.name is None or is_valid_legacy_metric_name(label.name):
        return label
    return LabelPair(name=escape_name(label.name, scheme), value=label.value)
