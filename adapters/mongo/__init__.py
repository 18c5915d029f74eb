"""
MongoDB adapters.
"""

from .task_repository import MongoTaskRepository, build_task_query
from .user_repository import MongoUserRepository

__all__ = [
    "MongoTaskRepository",
    "MongoUserRepository",
    "build_task_query",
]
