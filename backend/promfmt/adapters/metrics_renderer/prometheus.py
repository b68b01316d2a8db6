"""Negotiating implementation of the MetricsRenderer protocol.

Runs the full scrape pipeline: Accept header -> FormatNegotiator ->
escaping + serialization in a MetricsEncoder. Formats the encoder cannot
produce (protobuf, with the prometheus-client encoder) degrade to the default
text format.
"""

from collections.abc import Callable, Iterable

from promfmt.core.logging import logger
from promfmt.core.protocols.metrics_encoder import MetricsEncoder
from promfmt.core.protocols.metrics_renderer import MetricsRenderer, RenderedMetrics
from promfmt.domains.families.types import MetricFamily
from promfmt.domains.formats.negotiation import FormatNegotiator


class NegotiatingMetricsRenderer(MetricsRenderer):
    """Render collected metric families in the format the client asked for."""

    def __init__(
        self,
        collect: Callable[[], Iterable[MetricFamily]],
        encoder: MetricsEncoder,
        negotiator: FormatNegotiator,
        *,
        include_openmetrics: bool = True,
    ) -> None:
        self._collect = collect
        self._encoder = encoder
        self._negotiator = negotiator
        self._include_openmetrics = include_openmetrics
        self._logger = logger.with_context(component="negotiating_metrics_renderer")

    def render(self, accept: str | None) -> RenderedMetrics:
        fmt = self._negotiator.negotiate(accept, include_openmetrics=self._include_openmetrics)
        if not self._encoder.supports(fmt):
            self._logger.debug(f"Encoder cannot produce {fmt}, serving default text format")
            fmt = self._negotiator.negotiate(None)
        body = self._encoder.encode(fmt, self._collect())
        return RenderedMetrics(content_type=fmt, body=body)
