"""
Authentication API Routes.
"""

from fastapi import APIRouter, Depends, status

from core.logger import logger
from internal.api.dependencies.auth import get_current_user_id
from internal.api.dependencies.task_dependencies import get_auth_service
from internal.api.schemas.auth_schemas import LoginRequest, RegisterRequest, UserResponse
from internal.api.schemas.common_schemas import StandardResponse
from internal.api.utils import success_response
from services.auth_service import IAuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Register User",
    responses={
        201: {"description": "User successfully created"},
        409: {"description": "User already exists"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: IAuthService = Depends(get_auth_service),
):
    logger.info(f"API: Register request: username={request.username}")

    user = await auth_service.register(
        email=request.email,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    return success_response(
        message="User registered successfully",
        data=UserResponse.from_user(user).to_json(),
    )


@router.post(
    "/login",
    response_model=StandardResponse,
    summary="Login",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    auth_service: IAuthService = Depends(get_auth_service),
):
    logger.info(f"API: Login request: username={request.username}")

    user, access_token = await auth_service.login(request.username, request.password)

    return success_response(
        message="Login successful",
        data={"user": UserResponse.from_user(user).to_json(), "accessToken": access_token},
    )


@router.get(
    "/profile",
    response_model=StandardResponse,
    summary="Current User Profile",
)
async def get_profile(
    caller_id: str = Depends(get_current_user_id),
    auth_service: IAuthService = Depends(get_auth_service),
):
    user = await auth_service.get_profile(caller_id)
    return success_response(
        message="Profile retrieved successfully",
        data=UserResponse.from_user(user).to_json(),
    )


@router.get(
    "/users",
    response_model=StandardResponse,
    summary="List Users",
    description="All users, used to pick a task assignee",
)
async def list_users(
    caller_id: str = Depends(get_current_user_id),
    auth_service: IAuthService = Depends(get_auth_service),
):
    users = await auth_service.list_users()
    return success_response(
        message=f"Retrieved {len(users)} users",
        data=[UserResponse.from_user(user).to_json() for user in users],
    )


def create_auth_routes() -> APIRouter:
    return router
