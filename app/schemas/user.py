"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional


class UserAuthRequest(BaseModel):
    """Request schema for POST /auth/token."""
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration (never creates an admin)."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins adding a user, who may be an admin."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(BaseModel):
    """Partial user update; username and isAdmin cannot change here."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    first_name: Optional[str] = Field(None, alias="firstName", min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, alias="lastName", min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class UserResponse(BaseModel):
    """User profile response (no password)."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")


class UserDetailResponse(UserResponse):
    """User profile with the ids of the jobs applied to."""
    jobs: List[int] = []


class UserResult(BaseModel):
    user: UserResponse


class UserDetailResult(BaseModel):
    user: UserDetailResponse


class UserCreatedResult(BaseModel):
    user: UserResponse
    token: str


class UserList(BaseModel):
    users: List[UserResponse]


class UserDeleted(BaseModel):
    deleted: str


class ApplicationResult(BaseModel):
    applied: int


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str
