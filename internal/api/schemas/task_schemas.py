"""
Pydantic schemas for Task Management API.
"""

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.entities import TaskStatus, TaskView, UserSummary
from domain.errors import ValidationFailure
from domain.value_objects import TaskCreate, TaskUpdate
from internal.api.schemas.common_schemas import UtcDatetime


def parse_due_date_bound(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse a dueDateFrom / dueDateTo query value.

    Accepts an ISO-8601 date or date-time. A date-only upper bound covers
    the whole day.

    Raises:
        ValidationFailure: If the value is not a valid ISO-8601 date
    """
    if value is None or value == "":
        return None

    try:
        if len(value) == 10:
            day = date.fromisoformat(value)
            return datetime.combine(day, time.max if end_of_day else time.min)
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationFailure(f"Invalid date: {value}") from e


class TaskCreateRequest(BaseModel):
    """Request model for task creation."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "title": "Complete project documentation",
                    "description": "Write comprehensive documentation for the task management system",
                    "status": "Pending",
                    "assignedUser": "507f1f77bcf86cd799439011",
                    "dueDate": "2024-12-31T23:59:59.000Z",
                }
            ]
        },
    )

    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(..., min_length=1, description="Task description")
    status: TaskStatus = Field(..., description="Pending, In Progress or Completed")
    assigned_user: str = Field(..., alias="assignedUser", min_length=1, description="Assignee user id")
    due_date: datetime = Field(..., alias="dueDate", description="ISO-8601 date-time")

    def to_domain(self) -> TaskCreate:
        return TaskCreate(
            title=self.title,
            description=self.description,
            status=self.status,
            assigned_user=self.assigned_user,
            due_date=self.due_date,
        )


class TaskUpdateRequest(BaseModel):
    """Request model for partial task update. Omitted fields keep their value."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"status": "In Progress"}]},
    )

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[TaskStatus] = None
    assigned_user: Optional[str] = Field(None, alias="assignedUser", min_length=1)
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    def to_domain(self) -> TaskUpdate:
        return TaskUpdate(
            title=self.title,
            description=self.description,
            status=self.status,
            assigned_user=self.assigned_user,
            due_date=self.due_date,
        )


class UserSummaryResponse(BaseModel):
    """Embedded user reference."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    @classmethod
    def from_summary(cls, summary: UserSummary) -> "UserSummaryResponse":
        return cls(
            id=summary.id,
            username=summary.username,
            first_name=summary.first_name,
            last_name=summary.last_name,
        )


class TaskResponse(BaseModel):
    """Task with expanded user references."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    description: str
    status: TaskStatus
    assigned_user: UserSummaryResponse = Field(..., alias="assignedUser")
    due_date: UtcDatetime = Field(..., alias="dueDate")
    created_by: UserSummaryResponse = Field(..., alias="createdBy")
    created_at: UtcDatetime = Field(..., alias="createdAt")
    updated_at: UtcDatetime = Field(..., alias="updatedAt")

    @classmethod
    def from_view(cls, view: TaskView) -> "TaskResponse":
        task = view.task
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            assigned_user=UserSummaryResponse.from_summary(view.assigned_user),
            due_date=task.due_date,
            created_by=UserSummaryResponse.from_summary(view.created_by),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class TaskStatsResponse(BaseModel):
    """Task counts per status."""

    model_config = ConfigDict(populate_by_name=True)

    pending: int = Field(..., alias="Pending")
    in_progress: int = Field(..., alias="In Progress")
    completed: int = Field(..., alias="Completed")
    total: int
