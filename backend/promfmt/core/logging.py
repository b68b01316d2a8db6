"""Logging for promfmt.

The library never installs handlers; applications configure the ``promfmt``
logger like any other stdlib logger. ``logger.with_context(...)`` returns an
adapter that appends key/value context to every message.
"""

import logging
from typing import Any


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that renders its context dict after the message."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        if not self.extra:
            return msg, kwargs
        context = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} [{context}]", kwargs

    def with_context(self, **context: Any) -> "ContextualLogger":
        """Return a new logger carrying this logger's context plus ``context``."""
        return ContextualLogger(self.logger, {**(self.extra or {}), **context})


logger = ContextualLogger(logging.getLogger("promfmt"), {})
