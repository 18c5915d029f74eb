"""
Domain value objects: task inputs and the closed task filter.
"""

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.entities import TaskStatus


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to naive UTC, the representation kept in storage."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class TaskFilter:
    """
    Closed set of task filters. Every field is optional and present
    fields are AND-combined.

    `search` matches title OR description, case-insensitively, as a
    literal substring.
    """

    status: Optional[TaskStatus] = None
    assigned_user: Optional[str] = None
    due_from: Optional[datetime] = None
    due_to: Optional[datetime] = None
    search: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "due_from", to_utc_naive(self.due_from))
        object.__setattr__(self, "due_to", to_utc_naive(self.due_to))
        if self.search is not None and not self.search.strip():
            object.__setattr__(self, "search", None)

    @property
    def has_due_range(self) -> bool:
        return self.due_from is not None or self.due_to is not None


@dataclass(frozen=True)
class TaskCreate:
    """Input for creating a task."""

    title: str
    description: str
    assigned_user: str
    due_date: datetime
    status: Optional[TaskStatus] = None

    def __post_init__(self):
        object.__setattr__(self, "due_date", to_utc_naive(self.due_date))


@dataclass(frozen=True)
class TaskUpdate:
    """Partial update. Fields left as None keep their stored value."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    assigned_user: Optional[str] = None
    due_date: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "due_date", to_utc_naive(self.due_date))

    def changes(self) -> Dict[str, Any]:
        """Return only the fields that were provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
