"""Local notification models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class PendingNotification(BaseModel):
    """A locally delivered reminder waiting to fire.

    Attributes:
        identifier: Notification key; the owning task's id as a string
        title: Headline shown when the reminder fires
        body: Reminder text
        fire_at: When the reminder becomes due
        created_at: When the reminder was scheduled
    """

    identifier: str = Field(min_length=1)
    title: str = ""
    body: str = ""
    fire_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("fire_at", "created_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.astimezone()
        return v

    @property
    def payload(self) -> dict[str, Any]:
        """Content of the reminder, as logged for diagnostics."""
        return {
            "title": self.title,
            "body": self.body,
            "fire_at": self.fire_at.isoformat(),
        }
