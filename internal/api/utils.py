"""
API utility functions for response formatting.
"""

from typing import Any, Dict

from domain.errors import TaskManagerError


def success_response(message: str = "Success", data: Any = None) -> Dict:
    """
    Create a success response.

    Args:
        message: Success message
        data: Response data (optional)

    Returns:
        Standard response dictionary with error_code=0
    """
    return {"error_code": 0, "message": message, "data": data}


def error_response(message: str, error_code: int = 1, data: Any = None) -> Dict:
    """
    Create an error response.

    Args:
        message: Error message
        error_code: Error code (default: 1, internal error)
        data: Optional error data

    Returns:
        Standard response dictionary
    """
    return {"error_code": error_code, "message": message, "data": data}


def domain_error_response(exc: TaskManagerError) -> Dict:
    """Convert a domain error to a standard error response."""
    data = {"reason": exc.reason} if exc.reason else None
    return error_response(message=exc.message, error_code=exc.error_code, data=data)
