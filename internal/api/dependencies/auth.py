"""
Authentication dependencies for API endpoints.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.logger import logger
from domain.errors import AuthenticationError
from internal.api.dependencies.task_dependencies import get_auth_service
from services.auth_service import IAuthService

bearer_scheme = HTTPBearer(auto_error=False, description="JWT access token from /auth/login")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: IAuthService = Depends(get_auth_service),
) -> str:
    """
    Resolve the caller id from the Authorization: Bearer header.

    Raises:
        AuthenticationError: 401 if the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        logger.warning("Missing bearer token in request")
        raise AuthenticationError("Not authenticated")

    return await auth_service.verify_token(credentials.credentials)
