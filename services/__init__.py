"""
Service layer implementing business logic.
Follows Service Layer Pattern and Single Responsibility Principle.
"""

from .auth_service import AuthService, IAuthService
from .task_service import ITaskService, TaskService

__all__ = [
    "AuthService",
    "IAuthService",
    "ITaskService",
    "TaskService",
]
