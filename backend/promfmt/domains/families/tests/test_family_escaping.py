"""Unit tests for escape_metric_family.

Covers:
- None and NO_ESCAPING short-circuits
- Family name escaping
- Structural sharing of unchanged metrics, label pairs and payloads
- The name-label path (value escaped) vs. ordinary labels (name escaped)
- Labels whose value is legacy-valid do not trigger a rebuild
"""

import pytest

from promfmt.domains.families.escaping import escape_metric_family, metric_needs_escaping
from promfmt.domains.families.types import (
    Counter,
    Gauge,
    LabelPair,
    Metric,
    MetricFamily,
    MetricType,
    Untyped,
)
from promfmt.domains.names.types import METRIC_NAME_LABEL, EscapingScheme

UNDERSCORES = EscapingScheme.UNDERSCORE_ESCAPING


def _family(name="foo.metric", *metrics: Metric) -> MetricFamily:
    return MetricFamily(
        name=name,
        help="some help",
        type=MetricType.UNTYPED,
        metric=metrics or (Metric(untyped=Untyped(value=1.234)),),
    )


class TestShortCircuits:
    @pytest.mark.parametrize("scheme", list(EscapingScheme))
    def test_none_family(self, scheme):
        assert escape_metric_family(None, scheme) is None

    def test_no_escaping_returns_same_object(self):
        family = _family()
        assert escape_metric_family(family, EscapingScheme.NO_ESCAPING) is family


class TestFamilyName:
    @pytest.mark.parametrize(
        "scheme,expected",
        [
            (EscapingScheme.UNDERSCORE_ESCAPING, "foo_metric"),
            (EscapingScheme.DOTS_ESCAPING, "foo_dot_metric"),
            (EscapingScheme.VALUE_ENCODING_ESCAPING, "U__foo_002e_metric"),
        ],
    )
    def test_illegal_name_is_escaped(self, scheme, expected):
        assert escape_metric_family(_family(), scheme).name == expected

    def test_legal_name_is_kept_even_under_dots(self):
        """Family names are only escaped when illegal, whatever the scheme."""
        out = escape_metric_family(_family("foo_metric"), EscapingScheme.DOTS_ESCAPING)
        assert out.name == "foo_metric"

    def test_missing_name_is_kept(self):
        assert escape_metric_family(_family(None), UNDERSCORES).name is None

    def test_help_and_type_are_copied(self):
        family = _family()
        out = escape_metric_family(family, UNDERSCORES)

        assert out is not family
        assert out.help == "some help"
        assert out.type is MetricType.UNTYPED


class TestMetrics:
    def test_dotted_label_rebuilds_only_that_metric(self):
        plain = Metric(untyped=Untyped(value=1.234))
        label = LabelPair(name="dotted.label.name", value="my.label.value")
        labelled = Metric(label=(label,), counter=Counter(value=8), timestamp_ms=1234)
        family = _family("foo.metric", plain, labelled)

        out = escape_metric_family(family, UNDERSCORES)

        assert out.name == "foo_metric"
        assert out.metric[0] is plain
        rebuilt = out.metric[1]
        assert rebuilt is not labelled
        assert rebuilt.label == (LabelPair(name="dotted_label_name", value="my.label.value"),)
        assert rebuilt.counter is labelled.counter
        assert rebuilt.timestamp_ms == 1234

    def test_input_is_not_mutated(self):
        label = LabelPair(name="dotted.label.name", value="my.label.value")
        family = _family("foo.metric", Metric(label=(label,), gauge=Gauge(value=1)))

        escape_metric_family(family, UNDERSCORES)

        assert family.name == "foo.metric"
        assert family.metric[0].label[0] is label
        assert label.name == "dotted.label.name"

    def test_name_label_value_is_escaped_and_name_untouched(self):
        name_label = LabelPair(name=METRIC_NAME_LABEL, value="foo.metric")
        metric = Metric(label=(name_label,), gauge=Gauge(value=1))

        out = escape_metric_family(_family("foo.metric", metric), UNDERSCORES)

        assert out.metric[0].label == (LabelPair(name=METRIC_NAME_LABEL, value="foo_metric"),)

    def test_legal_labels_are_shared_in_rebuilt_metric(self):
        legal = LabelPair(name="code", value="200")
        illegal = LabelPair(name="http.method", value="GET")
        odd_value = LabelPair(name="path", value="/api/v1")
        metric = Metric(label=(legal, illegal, odd_value), gauge=Gauge(value=1))

        out = escape_metric_family(_family("up", metric), UNDERSCORES)

        escaped = out.metric[0].label
        assert escaped[0] is legal
        assert escaped[1] == LabelPair(name="http_method", value="GET")
        assert escaped[2] is odd_value

    def test_label_without_name_passes_through(self):
        nameless = LabelPair(value="x.y")
        metric = Metric(label=(nameless,), gauge=Gauge(value=1))

        out = escape_metric_family(_family("up", metric), UNDERSCORES)

        assert out.metric[0] is not metric
        assert out.metric[0].label[0] is nameless

    def test_illegal_label_name_with_legal_value_is_not_escaped(self):
        """Rebuild is decided by label values, so this metric is shared as-is."""
        metric = Metric(label=(LabelPair(name="dotted.name", value="ok"),), gauge=Gauge(value=1))

        out = escape_metric_family(_family("up", metric), UNDERSCORES)

        assert out.metric[0] is metric


class TestMetricNeedsEscaping:
    @pytest.mark.parametrize(
        "labels,expected",
        [
            ((), False),
            ((LabelPair(name="a", value="b"),), False),
            ((LabelPair(name="a", value="b.c"),), True),
            ((LabelPair(name="a.b", value="c"),), False),
            ((LabelPair(name=METRIC_NAME_LABEL, value="x.y"),), True),
            ((LabelPair(name="a", value="9"),), True),
            ((LabelPair(name="a"),), True),
        ],
    )
    def test_checks_label_values(self, labels, expected):
        assert metric_needs_escaping(Metric(label=labels)) is expected
