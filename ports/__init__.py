"""
Ports: abstract interfaces the services depend on.
"""

from .repository import TaskRepositoryPort, UserRepositoryPort

__all__ = [
    "TaskRepositoryPort",
    "UserRepositoryPort",
]
