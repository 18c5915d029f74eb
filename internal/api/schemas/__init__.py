"""
API Schemas (Request/Response Models).
"""

from .auth_schemas import LoginRequest, RegisterRequest, UserResponse
from .common_schemas import HealthResponse, StandardResponse
from .task_schemas import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdateRequest,
    UserSummaryResponse,
)

__all__ = [
    # Common schemas
    "StandardResponse",
    "HealthResponse",
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "UserResponse",
    # Task schemas
    "TaskCreateRequest",
    "TaskUpdateRequest",
    "TaskResponse",
    "TaskStatsResponse",
    "UserSummaryResponse",
]
