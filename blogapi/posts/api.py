"""
Posts API

Reads are public. Creating and deleting need `Authorization: Bearer <token>`.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from blogapi.posts.repository import PostRepository
from blogapi.posts.schemas import PostCreate, PostResponse, PostUpdate
from blogapi.posts.service import PostService
from blogapi.shared.auth import SessionValidator, get_bearer_token, get_session_validator
from blogapi.shared.database import get_db
from blogapi.users.store import CredentialStore

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(
    db: Session = Depends(get_db),
    sessions: SessionValidator = Depends(get_session_validator),
) -> PostService:
    return PostService(PostRepository(db), CredentialStore(db), sessions)


# ──────────────────────────────────────────────────────────────────────────────
# Public endpoints (no auth required)
# ──────────────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[PostResponse])
def list_posts(service: PostService = Depends(get_post_service)):
    """List all posts with their owners."""
    return service.list_posts()


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, service: PostService = Depends(get_post_service)):
    """Get a single post by id."""
    return service.get_post(post_id)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    post_data: PostUpdate,
    service: PostService = Depends(get_post_service),
):
    """Update likes and other mutable fields. No ownership check."""
    return service.update_post(post_id, post_data)


# ──────────────────────────────────────────────────────────────────────────────
# Owner endpoints (bearer token required)
# ──────────────────────────────────────────────────────────────────────────────

@router.post("", response_model=PostResponse)
def create_post(
    post_data: PostCreate,
    token: Optional[str] = Depends(get_bearer_token),
    service: PostService = Depends(get_post_service),
):
    """Create a post owned by the caller."""
    return service.create_post(token, post_data)


@router.delete("/{post_id}", status_code=204)
def delete_post(
    post_id: int,
    token: Optional[str] = Depends(get_bearer_token),
    service: PostService = Depends(get_post_service),
):
    """Delete a post. Only its owner may do this."""
    service.delete_post(token, post_id)
    return Response(status_code=204)
