"""Unit tests for the contextual logger."""

import logging

from promfmt.core.logging import ContextualLogger, logger


class TestContextualLogger:
    def test_with_context_merges_fields(self):
        child = logger.with_context(component="a").with_context(request_id="r1")

        assert isinstance(child, ContextualLogger)
        assert child.extra == {"component": "a", "request_id": "r1"}
        assert logger.extra == {}

    def test_context_is_appended_to_message(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="promfmt"):
            logger.with_context(component="negotiator").debug("hello")

        assert caplog.records[-1].getMessage() == "hello [component=negotiator]"

    def test_no_context_leaves_message_alone(self, caplog):
        with caplog.at_level(logging.INFO, logger="promfmt"):
            logger.info("plain")

        assert caplog.records[-1].getMessage() == "plain"
