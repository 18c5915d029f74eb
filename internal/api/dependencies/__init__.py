"""
FastAPI dependencies.
"""

from .auth import get_current_user_id
from .task_dependencies import get_auth_service, get_task_service

__all__ = [
    "get_current_user_id",
    "get_auth_service",
    "get_task_service",
]
