"""Configuration models for taskapp.

The configuration is a single JSON document validated by these pydantic models.
"""

from __future__ import annotations

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage backend configuration."""

    backend: Literal["sqlite", "memory"] = Field(
        default="sqlite", description="Record store backend"
    )
    db_path: str | None = Field(
        default=None, description="SQLite database path (default: user data dir)"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class UIConfig(BaseModel):
    """UI configuration."""

    timezone: str = Field(default="local", description="'local' or an IANA zone")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v == "local":
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v

    def tzinfo(self) -> ZoneInfo | None:
        """Timezone for row dates; None means the system local zone."""
        if self.timezone == "local":
            return None
        return ZoneInfo(self.timezone)


class NotificationConfig(BaseModel):
    """Local reminder configuration."""

    enabled: bool = Field(default=True)
    log_pending_on_delete: bool = Field(
        default=True, description="Log remaining reminders after a delete"
    )


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


class AppConfig(BaseModel):
    """Main taskapp configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
