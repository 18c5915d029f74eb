"""
Repository Ports.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from domain.entities import Task, User, UserSummary
from domain.value_objects import TaskFilter


class TaskRepositoryPort(ABC):
    """Abstract interface for the task collection."""

    @abstractmethod
    async def insert(self, data: Dict[str, Any]) -> Task:
        """
        Insert a new task.

        Args:
            data: Task fields keyed by entity attribute name
                (title, description, status, assigned_user, created_by, due_date)

        Returns:
            Task: The stored task with id and timestamps assigned
        """
        pass

    @abstractmethod
    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        pass

    @abstractmethod
    async def find_one(self, task_id: str, assigned_user: str) -> Optional[Task]:
        """Get task by ID only if it is assigned to `assigned_user`."""
        pass

    @abstractmethod
    async def find_many(self, filters: TaskFilter) -> List[Task]:
        """List tasks matching filters, most recently created first."""
        pass

    @abstractmethod
    async def update_by_id(self, task_id: str, changes: Dict[str, Any]) -> Optional[Task]:
        """
        Apply a partial update.

        Returns:
            Optional[Task]: The task after the update, None if it no longer exists
        """
        pass

    @abstractmethod
    async def delete_by_id(self, task_id: str) -> bool:
        """Permanently delete a task."""
        pass

    @abstractmethod
    async def count_by_status(self, assigned_user: Optional[str] = None) -> Dict[str, int]:
        """Count tasks grouped by status, optionally restricted to one assignee."""
        pass


class UserRepositoryPort(ABC):
    """Abstract interface for the user collection."""

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> User:
        """Insert a new user."""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        """Get a user matching either the email or the username."""
        pass

    @abstractmethod
    async def find_summaries(self, user_ids: Iterable[str]) -> Dict[str, UserSummary]:
        """Resolve user ids to summaries. Unknown ids are absent from the result."""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """List every user."""
        pass
