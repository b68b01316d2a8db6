"""Unit tests for Accept header parsing."""

import pytest

from promfmt.domains.formats.accept import AcceptOffer, parse_accept


class TestParseAccept:
    @pytest.mark.parametrize("header", [None, "", " ", ",", "garbage", "a/b/c"])
    def test_empty_or_malformed(self, header):
        assert parse_accept(header) == []

    def test_parameters(self):
        offers = parse_accept(
            "application/vnd.google.protobuf;proto=io.prometheus.client.MetricFamily;"
            "encoding=delimited; validation-scheme=utf8;"
        )

        assert offers == [
            AcceptOffer(
                type="application",
                subtype="vnd.google.protobuf",
                params={
                    "proto": "io.prometheus.client.MetricFamily",
                    "encoding": "delimited",
                    "validation-scheme": "utf8",
                },
            )
        ]
        assert offers[0].media_type == "application/vnd.google.protobuf"

    def test_case_and_quotes(self):
        (offer,) = parse_accept('Text/Plain; Version="1.0.0"')

        assert offer.media_type == "text/plain"
        assert offer.params == {"version": "1.0.0"}

    def test_orders_by_quality(self):
        offers = parse_accept("text/plain;q=0.3,application/openmetrics-text;q=0.9,*/*;q=0.1")
        assert [o.media_type for o in offers] == [
            "application/openmetrics-text",
            "text/plain",
            "*/*",
        ]
        assert [o.q for o in offers] == [0.9, 0.3, 0.1]

    def test_orders_by_specificity_on_equal_quality(self):
        offers = parse_accept("*/*,text/*,text/plain,text/plain;version=0.0.4")
        assert [(o.media_type, o.params) for o in offers] == [
            ("text/plain", {"version": "0.0.4"}),
            ("text/plain", {}),
            ("text/*", {}),
            ("*/*", {}),
        ]

    def test_ties_keep_header_order(self):
        offers = parse_accept("application/openmetrics-text,text/plain")
        assert [o.media_type for o in offers] == ["application/openmetrics-text", "text/plain"]

    def test_bare_wildcard(self):
        assert parse_accept("*") == [AcceptOffer(type="*", subtype="*")]

    @pytest.mark.parametrize("q", ["0", "0.0", "abc", "nan"])
    def test_unacceptable_quality_is_dropped(self, q):
        offers = parse_accept(f"text/plain;q={q},application/openmetrics-text")
        assert [o.media_type for o in offers] == ["application/openmetrics-text"]

    def test_offers_are_hashable(self):
        (offer,) = parse_accept("text/plain;version=1.0.0")

        assert {offer} == {AcceptOffer(type="text", subtype="plain", params={"version": "1.0.0"})}

    def test_params_are_read_only(self):
        params = {"version": "1.0.0"}
        offer = AcceptOffer(type="text", subtype="plain", params=params)
        params["version"] = "0.0.4"

        assert offer.params["version"] == "1.0.0"
        with pytest.raises(TypeError):
            offer.params["version"] = "0.0.4"
