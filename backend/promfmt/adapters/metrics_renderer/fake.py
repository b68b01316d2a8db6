"""Fake MetricsRenderer for testing.

Records render() calls so tests of scrape handlers can assert on the Accept
headers they forwarded without running negotiation.
"""

from promfmt.core.protocols.metrics_renderer import MetricsRenderer, RenderedMetrics


class FakeMetricsRenderer(MetricsRenderer):
    """In-memory spy implementing the MetricsRenderer protocol."""

    def __init__(self, content_type: str = "text/plain") -> None:
        self.content_type = content_type
        self.accept_headers: list[str | None] = []

    def render(self, accept: str | None) -> RenderedMetrics:
        self.accept_headers.append(accept)
        return RenderedMetrics(content_type=self.content_type, body=b"# fake metrics\n")
