"""Task data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

# Fixed, locale-independent row date pattern.
ROW_DATE_FORMAT = "%Y-%m-%d %H:%M"

# Columns a task collection can be ordered by.
SORTABLE_FIELDS = ("id", "title", "category", "date")


class Task(BaseModel):
    """Task model representing one to-do item.

    Attributes:
        id: Unique identifier, assigned as max(existing id) + 1
        title: User-entered title (may be empty)
        category: Free-form category used as a prefix filter key
        date: Timezone-aware timestamp; the list sort key (newest first)
    """

    id: int = Field(ge=0)
    title: str = ""
    category: str = ""
    date: datetime

    @field_validator("date")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as local time."""
        if v.tzinfo is None:
            return v.astimezone()
        return v

    def format_date(self, tz=None) -> str:
        """Render the date with the row pattern, converted to *tz* (local if None)."""
        return self.date.astimezone(tz).strftime(ROW_DATE_FORMAT)


class EditRequest(BaseModel):
    """Hand-off from the task list to the edit flow.

    Exactly one of ``existing_task`` or ``new_task`` is supplied.
    """

    existing_task: Task | None = None
    new_task: Task | None = None

    @model_validator(mode="after")
    def exactly_one_task(self) -> EditRequest:
        if (self.existing_task is None) == (self.new_task is None):
            raise ValueError("exactly one of existing_task or new_task must be set")
        return self

    @property
    def is_new(self) -> bool:
        return self.new_task is not None

    @property
    def task(self) -> Task:
        return self.new_task if self.new_task is not None else self.existing_task
