"""
Dependency Injection Container.
"""

from typing import Any, Dict, Type, TypeVar

from core.logger import logger

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.
    """

    _instances: Dict[Type, Any] = {}

    @classmethod
    def register(cls, interface: Type[T], instance: Any) -> None:
        """Register a singleton instance for an interface."""
        cls._instances[interface] = instance

    @classmethod
    def resolve(cls, interface: Type[T]) -> T:
        """Resolve an interface to its implementation."""
        if interface in cls._instances:
            return cls._instances[interface]
        raise KeyError(f"No provider registered for {interface.__name__}")

    @classmethod
    def clear(cls):
        """Clear all registrations (useful for testing)."""
        cls._instances.clear()


def bootstrap_container(db, settings) -> None:
    """
    Register repository adapters and services for a connected database.

    Args:
        db: Connected MongoDB manager
        settings: Application settings
    """
    from adapters.mongo.task_repository import MongoTaskRepository
    from adapters.mongo.user_repository import MongoUserRepository
    from core.database import TASKS_COLLECTION, USERS_COLLECTION
    from ports.repository import TaskRepositoryPort, UserRepositoryPort
    from services.auth_service import AuthService, IAuthService
    from services.task_service import ITaskService, TaskService

    Container.register(TaskRepositoryPort, MongoTaskRepository(db.get_collection(TASKS_COLLECTION)))
    Container.register(UserRepositoryPort, MongoUserRepository(db.get_collection(USERS_COLLECTION)))

    tasks = Container.resolve(TaskRepositoryPort)
    users = Container.resolve(UserRepositoryPort)
    Container.register(ITaskService, TaskService(tasks, users))
    Container.register(IAuthService, AuthService(users, settings))

    logger.debug("Container bootstrapped with MongoDB adapters")
