"""
API Routes.
"""

from .auth_routes import create_auth_routes
from .health_routes import create_health_routes
from .task_routes import create_task_routes

__all__ = [
    "create_auth_routes",
    "create_health_routes",
    "create_task_routes",
]
