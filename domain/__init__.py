"""
Domain layer: entities, value objects and errors.
"""

from .entities import Task, TaskStatus, TaskView, User, UserSummary
from .errors import (
    ASSIGNED_USER_MISSING,
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    TaskManagerError,
    ValidationFailure,
)
from .value_objects import TaskCreate, TaskFilter, TaskUpdate

__all__ = [
    "Task",
    "TaskStatus",
    "TaskView",
    "User",
    "UserSummary",
    "TaskCreate",
    "TaskFilter",
    "TaskUpdate",
    "ASSIGNED_USER_MISSING",
    "AuthenticationError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "TaskManagerError",
    "ValidationFailure",
]
