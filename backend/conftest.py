"""Shared pytest fixtures."""

import pytest

from promfmt.core import config


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Give every test pristine process-wide codec settings."""
    monkeypatch.setattr(config, "_settings", None)
