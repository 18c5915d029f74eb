"""
Common API schemas shared across different endpoints.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer


def _isoformat_utc(value: datetime) -> str:
    """Stored datetimes are naive UTC, render them with an explicit Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


UtcDatetime = Annotated[datetime, PlainSerializer(_isoformat_utc, return_type=str, when_used="json")]


class StandardResponse(BaseModel):
    """
    Standard API response format for all endpoints.

    - error_code: 0 = success, anything else identifies the failure kind
    - message: Success or error message
    - data: Response data (optional)
    """

    error_code: int = 0
    message: str
    data: Optional[Any] = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": 0,
                    "message": "Task retrieved successfully",
                    "data": {"_id": "665f1c2e8f1b2a3c4d5e6f70", "status": "Pending"},
                },
                {
                    "error_code": 5,
                    "message": "Assigned user not found",
                    "data": {"reason": "AssignedUserMissing"},
                },
            ]
        }
    )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
    database: str

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "status": "healthy",
                    "service": "Task Manager API",
                    "version": "1.0.0",
                    "database": "connected",
                }
            ]
        }
    )
