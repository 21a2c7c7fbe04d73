"""
Pydantic schemas for the posts API.

Defines request/response models with validation.
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class PostCreate(BaseModel):
    """Schema for creating a post. The owner comes from the bearer token."""
    title: str = Field(..., min_length=1, max_length=300)
    author: Optional[str] = Field(None, max_length=200)
    url: str = Field(..., min_length=1, max_length=500)
    likes: Optional[int] = Field(0, ge=0)

    @field_validator("title", "url")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("likes")
    @classmethod
    def default_likes(cls, value: Optional[int]) -> int:
        return 0 if value is None else value


class PostUpdate(BaseModel):
    """
    Schema for updating a post. All fields optional.

    Unknown fields (id, owner, ... when a client sends back a whole post)
    are ignored, so ownership can never change through an update.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    author: Optional[str] = Field(None, max_length=200)
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    likes: Optional[int] = Field(None, ge=0)


class OwnerSummary(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class PostResponse(BaseModel):
    """Schema for post responses, annotated with the owner."""
    id: int
    title: str
    author: Optional[str] = None
    url: str
    likes: int
    owner: OwnerSummary

    class Config:
        from_attributes = True
