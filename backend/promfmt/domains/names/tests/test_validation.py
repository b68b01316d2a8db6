"""Unit tests for metric name validation.

Covers:
- Legacy character rules (first-character digits, colon, underscore)
- UTF-8 validation scheme, including lone surrogates
- Instance vs. process-wide settings
- Unknown scheme is an invariant violation
"""

import pytest

from promfmt.core.config import CodecSettings
from promfmt.core.exceptions import InvariantViolationError
from promfmt.domains.names.types import ValidationScheme
from promfmt.domains.names.validation import (
    NameValidator,
    is_valid_legacy_metric_name,
    is_valid_metric_name,
)

LEGACY = CodecSettings(validation_scheme=ValidationScheme.LEGACY_VALIDATION)
UTF8 = CodecSettings(validation_scheme=ValidationScheme.UTF8_VALIDATION)


@pytest.mark.parametrize(
    "name,legacy_valid,utf8_valid",
    [
        ("", False, False),
        ("avalidname", True, True),
        ("_avalidname_", True, True),
        ("1valid_name", False, True),
        ("avalid_23name", True, True),
        ("Ava:lid_23name", True, True),
        ("a lid_23name", False, True),
        (":leading_colon", True, True),
        ("colon:in:the:middle", True, True),
        ("aüb", False, True),
        ("foo.bar", False, True),
        ("a\udcff", False, False),
    ],
)
def test_metric_name_validity(name, legacy_valid, utf8_valid):
    assert bool(is_valid_legacy_metric_name(name)) is legacy_valid
    assert NameValidator(LEGACY).is_valid_metric_name(name) is legacy_valid
    assert NameValidator(UTF8).is_valid_metric_name(name) is utf8_valid


class TestIsValidMetricName:
    """Scheme dispatch for is_valid_metric_name."""

    def test_legacy_check_ignores_configured_scheme(self):
        assert is_valid_metric_name("foo.bar", UTF8) is True
        assert is_valid_legacy_metric_name("foo.bar") is False

    def test_uses_process_wide_settings_by_default(self, monkeypatch):
        from promfmt.core import config

        monkeypatch.setattr(config, "_settings", UTF8)
        assert is_valid_metric_name("foo.bar") is True

        monkeypatch.setattr(config, "_settings", LEGACY)
        assert is_valid_metric_name("foo.bar") is False

    def test_unknown_scheme_raises(self):
        broken = CodecSettings.model_construct(validation_scheme="bogus")

        with pytest.raises(InvariantViolationError):
            NameValidator(broken).is_valid_metric_name("foo")

    def test_validator_exposes_scheme(self):
        assert NameValidator(UTF8).validation_scheme is ValidationScheme.UTF8_VALIDATION
