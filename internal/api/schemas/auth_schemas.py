"""
Pydantic schemas for authentication endpoints.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.entities import User
from internal.api.schemas.common_schemas import UtcDatetime

class RegisterRequest(BaseModel):
    """Request model for user registration."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "email": "john@example.com",
                    "username": "johndoe",
                    "password": "password123",
                    "firstName": "John",
                    "lastName": "Doe",
                }
            ]
        },
    )

    email: EmailStr
    username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., alias="firstName", min_length=1)
    last_name: str = Field(..., alias="lastName", min_length=1)


class LoginRequest(BaseModel):
    """Request model for login."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"username": "johndoe", "password": "password123"}]}
    )

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public user representation. Never includes the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    email: str
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    created_at: UtcDatetime = Field(..., alias="createdAt")
    updated_at: UtcDatetime = Field(..., alias="updatedAt")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
