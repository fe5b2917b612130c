"""
Forwarder configuration using Pydantic v2 Settings.

Values are read from the environment variables the Azure Function app is
configured with. Optional settings are applied only when present and not
blank; a value that is present but cannot be coerced fails validation, and
``load_settings`` turns that into a ``ConfigurationError``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

from .errors import ConfigurationError

PARAMETER_COMPANY_NAME = "LogicMonitorCompanyName"
PARAMETER_ACCESS_ID = "LogicMonitorAccessId"
PARAMETER_ACCESS_KEY = "LogicMonitorAccessKey"
PARAMETER_CONNECT_TIMEOUT = "LogApiClientConnectTimeout"
PARAMETER_READ_TIMEOUT = "LogApiClientReadTimeout"
PARAMETER_DEBUGGING = "LogApiClientDebugging"

DEFAULT_TIMEOUT_MS = 10_000


class ForwarderSettings(BaseSettings):
    """LogicMonitor account and HTTP client settings."""

    company_name: str | None = Field(
        default=None,
        validation_alias=PARAMETER_COMPANY_NAME,
        description="Company in the target URL '{company}.logicmonitor.com'",
    )
    access_id: str | None = Field(
        default=None,
        validation_alias=PARAMETER_ACCESS_ID,
        description="LogicMonitor access ID",
    )
    access_key: str | None = Field(
        default=None,
        validation_alias=PARAMETER_ACCESS_KEY,
        description="LogicMonitor access key",
        repr=False,
    )
    connect_timeout_ms: int | None = Field(
        default=None,
        gt=0,
        validation_alias=PARAMETER_CONNECT_TIMEOUT,
        description="Connection timeout in milliseconds (default 10000)",
    )
    read_timeout_ms: int | None = Field(
        default=None,
        gt=0,
        validation_alias=PARAMETER_READ_TIMEOUT,
        description="Read timeout in milliseconds (default 10000)",
    )
    debugging: bool | None = Field(
        default=None,
        validation_alias=PARAMETER_DEBUGGING,
        description="HTTP client debugging",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator(
        "connect_timeout_ms", "read_timeout_ms", "debugging", mode="before"
    )
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        return value

    @property
    def connect_timeout_seconds(self) -> float:
        return (self.connect_timeout_ms or DEFAULT_TIMEOUT_MS) / 1000.0

    @property
    def read_timeout_seconds(self) -> float:
        return (self.read_timeout_ms or DEFAULT_TIMEOUT_MS) / 1000.0

    @property
    def debugging_enabled(self) -> bool:
        return bool(self.debugging)


def load_settings(**overrides: Any) -> ForwarderSettings:
    """Read settings from the environment, failing fast on bad values."""
    try:
        return ForwarderSettings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError.from_validation_error(exc) from exc


# Mark Pydantic validators as used for vulture
_VULTURE_USED: tuple[object, ...] = (ForwarderSettings._blank_is_unset,)
