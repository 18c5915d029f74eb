"""
Domain error taxonomy.

Every error carries the HTTP status and envelope `error_code` it maps to,
so the API layer can render it without inspecting the type.
"""

from typing import Optional

ASSIGNED_USER_MISSING = "AssignedUserMissing"
TASK_MISSING = "TaskMissing"


class TaskManagerError(Exception):
    """Base class for all expected failures."""

    status_code = 500
    error_code = 1

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class ValidationFailure(TaskManagerError):
    """Malformed input: missing field, unparsable date, invalid enum value."""

    status_code = 422
    error_code = 2


class AuthenticationError(TaskManagerError):
    """Missing or invalid credentials / bearer token."""

    status_code = 401
    error_code = 3


class ForbiddenError(TaskManagerError):
    """Caller lacks permission for the requested mutation."""

    status_code = 403
    error_code = 4


class NotFoundError(TaskManagerError):
    """Referenced task or user does not exist (or is not visible)."""

    status_code = 404
    error_code = 5


class ConflictError(TaskManagerError):
    """Resource already exists."""

    status_code = 409
    error_code = 6
