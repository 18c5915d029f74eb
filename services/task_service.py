"""
Task Service.

Holds every decision about who may see or change a task:

- reads (find_one) are restricted to the assignee;
- updates are allowed to the creator or the assignee;
- deletes are allowed to the creator only.

The assignee of a new or reassigned task is checked for existence before
the write. The check and the write are two separate store operations with
no transaction around them, so a user deleted in between leaves a dangling
reference.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from core.logger import logger
from domain.entities import Task, TaskStatus, TaskView, UserSummary
from domain.errors import ASSIGNED_USER_MISSING, TASK_MISSING, ForbiddenError, NotFoundError
from domain.value_objects import TaskCreate, TaskFilter, TaskUpdate
from ports.repository import TaskRepositoryPort, UserRepositoryPort

STATS_TOTAL_KEY = "total"


class ITaskService(ABC):
    """Interface for task service operations."""

    @abstractmethod
    async def create(self, data: TaskCreate, caller_id: str) -> TaskView:
        pass

    @abstractmethod
    async def list_tasks(self, filters: TaskFilter) -> List[TaskView]:
        pass

    @abstractmethod
    async def find_one(self, task_id: str, caller_id: str) -> TaskView:
        pass

    @abstractmethod
    async def update(self, task_id: str, patch: TaskUpdate, caller_id: str) -> TaskView:
        pass

    @abstractmethod
    async def remove(self, task_id: str, caller_id: str) -> None:
        pass

    @abstractmethod
    async def get_stats(self, caller_id: Optional[str] = None) -> Dict[str, int]:
        pass


class TaskService(ITaskService):
    """
    Application service enforcing task ownership and visibility rules.
    """

    def __init__(self, tasks: TaskRepositoryPort, users: UserRepositoryPort):
        self.tasks = tasks
        self.users = users

    async def create(self, data: TaskCreate, caller_id: str) -> TaskView:
        """
        Create a task owned by the caller.

        Raises:
            NotFoundError: If the assigned user does not exist
        """
        logger.info(
            f"Creating task: title={data.title!r}, assigned_user={data.assigned_user}, created_by={caller_id}"
        )

        await self._ensure_user_exists(data.assigned_user)

        task = await self.tasks.insert(
            {
                "title": data.title,
                "description": data.description,
                "status": data.status or TaskStatus.PENDING,
                "assigned_user": data.assigned_user,
                "created_by": caller_id,
                "due_date": data.due_date,
            }
        )

        logger.info(f"Task created: id={task.id}")
        return (await self._expand([task]))[0]

    async def list_tasks(self, filters: TaskFilter) -> List[TaskView]:
        logger.debug(f"Listing tasks: filters={filters}")

        tasks = await self.tasks.find_many(filters)

        logger.info(f"Found {len(tasks)} tasks")
        return await self._expand(tasks)

    async def find_one(self, task_id: str, caller_id: str) -> TaskView:
        """
        Get a task visible to the caller.

        Only the assignee can read a task here, even its creator gets
        NotFound. This mirrors the listing, which is scoped to the assignee.

        Raises:
            NotFoundError: If the task does not exist or is not assigned to the caller
        """
        logger.debug(f"Fetching task: id={task_id}, caller={caller_id}")

        task = await self.tasks.find_one(task_id, caller_id)
        if task is None:
            logger.warning(f"Task not found for caller: id={task_id}, caller={caller_id}")
            raise NotFoundError("Task not found", reason=TASK_MISSING)

        return (await self._expand([task]))[0]

    async def update(self, task_id: str, patch: TaskUpdate, caller_id: str) -> TaskView:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the task or the new assigned user does not exist
            ForbiddenError: If the caller is neither creator nor assignee
        """
        task = await self._get_task(task_id)

        if not task.can_be_updated_by(caller_id):
            logger.warning(f"Update rejected: id={task_id}, caller={caller_id}")
            raise ForbiddenError("You do not have permission to update this task")

        changes = patch.changes()
        if "assigned_user" in changes:
            await self._ensure_user_exists(changes["assigned_user"])

        logger.info(f"Updating task: id={task_id}, fields={sorted(changes)}")

        updated = await self.tasks.update_by_id(task_id, changes)
        if updated is None:
            # Deleted between the permission check and the write
            raise NotFoundError("Task not found", reason=TASK_MISSING)

        logger.info(f"Task updated: id={task_id}")
        return (await self._expand([updated]))[0]

    async def remove(self, task_id: str, caller_id: str) -> None:
        """
        Permanently delete a task.

        Raises:
            NotFoundError: If the task does not exist
            ForbiddenError: If the caller is not the creator
        """
        task = await self._get_task(task_id)

        if not task.can_be_deleted_by(caller_id):
            logger.warning(f"Delete rejected: id={task_id}, caller={caller_id}")
            raise ForbiddenError("You do not have permission to delete this task")

        await self.tasks.delete_by_id(task_id)
        logger.info(f"Task deleted: id={task_id}")

    async def get_stats(self, caller_id: Optional[str] = None) -> Dict[str, int]:
        """
        Count tasks per status.

        All three statuses are always present, `total` is the sum of every
        group encountered.
        """
        counts = await self.tasks.count_by_status(caller_id)

        stats = {status.value: 0 for status in TaskStatus}
        stats[STATS_TOTAL_KEY] = 0
        for status, count in counts.items():
            stats[status] = count
            stats[STATS_TOTAL_KEY] += count

        logger.debug(f"Task stats for {caller_id or 'all users'}: {stats}")
        return stats

    async def _get_task(self, task_id: str) -> Task:
        task = await self.tasks.find_by_id(task_id)
        if task is None:
            logger.warning(f"Task not found: id={task_id}")
            raise NotFoundError("Task not found", reason=TASK_MISSING)
        return task

    async def _ensure_user_exists(self, user_id: str) -> None:
        if await self.users.find_by_id(user_id) is None:
            logger.warning(f"Assigned user not found: {user_id}")
            raise NotFoundError("Assigned user not found", reason=ASSIGNED_USER_MISSING)

    async def _expand(self, tasks: Iterable[Task]) -> List[TaskView]:
        """Replace user ids with summaries using one batched lookup."""
        tasks = list(tasks)
        user_ids = {t.assigned_user for t in tasks} | {t.created_by for t in tasks}
        summaries = await self.users.find_summaries(user_ids) if user_ids else {}

        def summary(user_id: str) -> UserSummary:
            return summaries.get(user_id) or UserSummary(id=user_id)

        return [
            TaskView(
                task=t,
                assigned_user=summary(t.assigned_user),
                created_by=summary(t.created_by),
            )
            for t in tasks
        ]
