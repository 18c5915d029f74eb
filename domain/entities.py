"""
Domain entities for the task manager.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    """Task status enumeration. Values are the wire representation."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


@dataclass
class User:
    """User entity. `password` holds the bcrypt hash."""

    id: str
    email: str
    username: str
    first_name: str
    last_name: str
    password: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_summary(self) -> "UserSummary":
        return UserSummary(
            id=self.id,
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
        )


@dataclass(frozen=True)
class UserSummary:
    """Embedded user reference returned with tasks."""

    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass
class Task:
    """Task entity. `assigned_user` and `created_by` are user ids."""

    id: str
    title: str
    description: str
    assigned_user: str
    created_by: str
    due_date: datetime
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def is_visible_to(self, caller_id: str) -> bool:
        """Reads are restricted to the assignee."""
        return self.assigned_user == caller_id

    def can_be_updated_by(self, caller_id: str) -> bool:
        return caller_id in (self.created_by, self.assigned_user)

    def can_be_deleted_by(self, caller_id: str) -> bool:
        return caller_id == self.created_by


@dataclass
class TaskView:
    """Task with its user references expanded into summaries."""

    task: Task
    assigned_user: UserSummary
    created_by: UserSummary
