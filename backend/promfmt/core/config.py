"""Process-wide codec settings.

Every producer and consumer in a deployment has to agree on one validation
scheme and one default escaping scheme, so they live in a single immutable
settings object installed once at startup:

    from promfmt.core.config import CodecSettings, configure

    configure(CodecSettings(name_escaping_scheme=EscapingScheme.VALUE_ENCODING_ESCAPING))

Install settings before concurrent use begins. Reads are not locked.
Long-lived components (NameValidator, FormatNegotiator) also accept an
explicit settings object, which is what tests use.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from promfmt.core.exceptions import SettingsAlreadyConfiguredError
from promfmt.core.logging import logger
from promfmt.domains.names.types import EscapingScheme, ValidationScheme


class CodecSettings(BaseModel):
    """Validation and default escaping schemes for the whole process."""

    model_config = ConfigDict(frozen=True)

    validation_scheme: ValidationScheme = Field(
        default=ValidationScheme.LEGACY_VALIDATION,
        description="Rule applied by is_valid_metric_name",
    )
    name_escaping_scheme: EscapingScheme = Field(
        default=EscapingScheme.UNDERSCORE_ESCAPING,
        description="Escaping used when a request does not ask for one",
    )


_settings: CodecSettings | None = None


def configure(settings: CodecSettings) -> CodecSettings:
    """Install the process-wide settings.

    Calling again with equal settings is a no-op.

    Raises:
        SettingsAlreadyConfiguredError: if different settings are already installed.
    """
    global _settings
    if _settings is not None and _settings != settings:
        raise SettingsAlreadyConfiguredError(
            f"Codec settings already configured as {_settings!r}, refusing {settings!r}"
        )
    _settings = settings
    logger.with_context(
        validation_scheme=settings.validation_scheme.value,
        name_escaping_scheme=settings.name_escaping_scheme.value,
    ).debug("Codec settings configured")
    return settings


def get_settings() -> CodecSettings:
    """Return the installed settings, installing the defaults on first use."""
    global _settings
    if _settings is None:
        _settings = CodecSettings()
    return _settings
