"""
Pydantic schemas for the users and login endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field

from blogapi.users.models import USERNAME_MIN_LENGTH, PASSWORD_MIN_LENGTH


class UserCreate(BaseModel):
    """Registration payload."""
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=100)
    name: Optional[str] = Field(None, max_length=200)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class LoginRequest(BaseModel):
    """
    Login payload.

    Missing fields default to empty strings so they fail as bad credentials
    rather than as a validation error.
    """
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    token: str
    username: str
    name: Optional[str] = None


class UserPostSummary(BaseModel):
    id: int
    title: str
    author: Optional[str] = None
    url: str
    likes: int

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """A user as exposed over the API. Never includes the password hash."""
    id: int
    username: str
    name: Optional[str] = None
    posts: list[UserPostSummary] = Field(default_factory=list)

    class Config:
        from_attributes = True
