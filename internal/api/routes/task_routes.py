"""
Task API Routes.

Every endpoint requires a bearer token; the caller id comes from it.
Domain errors propagate to the exception handlers registered in create_app().
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from core.logger import logger
from domain.entities import TaskStatus
from domain.value_objects import TaskFilter
from internal.api.dependencies.auth import get_current_user_id
from internal.api.dependencies.task_dependencies import get_task_service
from internal.api.schemas.common_schemas import StandardResponse
from internal.api.schemas.task_schemas import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdateRequest,
    parse_due_date_bound,
)
from internal.api.utils import success_response
from services.task_service import ITaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Create Task",
    description="Create a task assigned to an existing user. The caller becomes its creator.",
    responses={
        201: {"description": "Task successfully created"},
        404: {"description": "Assigned user not found"},
        422: {"description": "Validation error"},
    },
)
async def create_task(
    request: TaskCreateRequest,
    caller_id: str = Depends(get_current_user_id),
    task_service: ITaskService = Depends(get_task_service),
):
    logger.info(f"API: Create task request: caller={caller_id}")

    view = await task_service.create(request.to_domain(), caller_id)

    return success_response(
        message="Task created successfully",
        data=TaskResponse.from_view(view).to_json(),
    )


@router.get(
    "",
    response_model=StandardResponse,
    summary="List My Tasks",
    description="List tasks assigned to the caller, newest first, with optional filters",
)
async def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or description"),
    due_date_from: Optional[str] = Query(None, alias="dueDateFrom", description="ISO-8601 date or date-time"),
    due_date_to: Optional[str] = Query(None, alias="dueDateTo", description="ISO-8601 date or date-time"),
    caller_id: str = Depends(get_current_user_id),
    task_service: ITaskService = Depends(get_task_service),
):
    """
    List tasks for the current user.

    **Query Parameters:**
    - **status**: Pending, In Progress or Completed
    - **search**: substring matched against title and description
    - **dueDateFrom** / **dueDateTo**: inclusive due date range
    """
    filters = TaskFilter(
        status=status_filter,
        assigned_user=caller_id,
        search=search,
        due_from=parse_due_date_bound(due_date_from),
        due_to=parse_due_date_bound(due_date_to, end_of_day=True),
    )
    logger.info(f"API: List tasks request: caller={caller_id}")

    views = await task_service.list_tasks(filters)

    return success_response(
        message=f"Retrieved {len(views)} tasks",
        data=[TaskResponse.from_view(view).to_json() for view in views],
    )


@router.get(
    "/stats",
    response_model=StandardResponse,
    summary="Task Statistics",
    description="Count the caller's tasks per status",
)
async def get_task_stats(
    caller_id: str = Depends(get_current_user_id),
    task_service: ITaskService = Depends(get_task_service),
):
    stats = await task_service.get_stats(caller_id)

    return success_response(
        message="Task statistics retrieved successfully",
        data=TaskStatsResponse(**stats).model_dump(by_alias=True),
    )


@router.get(
    "/{task_id}",
    response_model=StandardResponse,
    summary="Get Task",
    responses={404: {"description": "Task not found"}},
)
async def get_task(
    task_id: str,
    caller_id: str = Depends(get_current_user_id),
    task_service: ITaskService = Depends(get_task_service),
):
    view = await task_service.find_one(task_id, caller_id)

    return success_response(
        message="Task retrieved successfully",
        data=TaskResponse.from_view(view).to_json(),
    )


@router.patch(
    "/{task_id}",
    response_model=StandardResponse,
    summary="Update Task",
    description="Partially update a task. Allowed to its creator and its assignee.",
    responses={
        403: {"description": "Forbidden - insufficient permissions"},
        404: {"description": "Task or assigned user not found"},
    },
)
async def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    caller_id: str = Depends(get_current_user_id),
    task_service: ITaskService = Depends(get_task_service),
):
    logger.info(f"API: Update task request: id={task_id}, caller={caller_id}")

    view = await task_service.update(task_id, request.to_domain(), caller_id)

    return success_response(
        message="Task updated successfully",
        data=TaskResponse.from_view(view).to_json(),
    )


@router.delete(
    "/{task_id}",
    response_model=StandardResponse,
    summary="Delete Task",
    description="Permanently delete a task. Allowed to its creator only.",
    responses={
        403: {"description": "Forbidden - insufficient permissions"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(
    task_id: str,
    caller_id: str = Depends(get_current_user_id),
    task_service: ITaskService = Depends(get_task_service),
):
    logger.info(f"API: Delete task request: id={task_id}, caller={caller_id}")

    await task_service.remove(task_id, caller_id)

    return success_response(message="Task deleted successfully")


def create_task_routes() -> APIRouter:
    return router
