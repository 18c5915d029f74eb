"""
Service Dependencies.
"""

from core.container import Container
from services.auth_service import IAuthService
from services.task_service import ITaskService


def get_task_service() -> ITaskService:
    """Get Task Service instance."""
    return Container.resolve(ITaskService)


def get_auth_service() -> IAuthService:
    """Get Auth Service instance."""
    return Container.resolve(IAuthService)
