"""
Post service

Authorization rules for blog posts:

- anyone may list and read posts;
- creating a post needs a valid session, and the post is bound to the
  session's user for good;
- only the owner may delete a post;
- updates carry no ownership check, any caller holding the id may change
  likes and the other mutable fields.
"""
import logging
from typing import Any, Mapping, Optional, Union

import pydantic

from blogapi.posts.models import Post
from blogapi.posts.repository import PostRepository
from blogapi.posts.schemas import PostCreate, PostUpdate
from blogapi.shared.auth import SessionValidator
from blogapi.shared.errors import Forbidden, Unauthorized, ValidationError
from blogapi.users.store import CredentialStore

logger = logging.getLogger(__name__)

# NOT NULL columns; an explicit null in an update leaves them alone
REQUIRED_FIELDS = ("title", "url", "likes")

Payload = Union[pydantic.BaseModel, Mapping[str, Any]]


def _parse(schema: type[pydantic.BaseModel], payload: Payload):
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, pydantic.BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(f"invalid fields: {', '.join(fields)}" if fields else "invalid request")


class PostService:
    def __init__(self, posts: PostRepository, users: CredentialStore, sessions: SessionValidator):
        self.posts = posts
        self.users = users
        self.sessions = sessions

    def list_posts(self) -> list[Post]:
        return self.posts.find_all()

    def get_post(self, post_id: int) -> Post:
        return self.posts.get(post_id)

    def create_post(self, auth_token: Optional[str], payload: Payload) -> Post:
        """
        Create a post owned by the caller.

        Raises:
            Unauthorized: If the token is missing or invalid, or its user
                no longer exists
            ValidationError: If title or url is missing or empty
        """
        user_id = self.sessions.validate(auth_token)
        data = _parse(PostCreate, payload)

        owner = self.users.find_by_id(user_id)
        if owner is None:
            logger.warning(f"Token for unknown user id={user_id} used to create a post")
            raise Unauthorized()

        post = Post(
            title=data.title,
            author=data.author,
            url=data.url,
            likes=data.likes or 0,
        )
        # Sets post.owner_id and keeps owner.posts in step
        owner.posts.append(post)
        created = self.posts.create(post)
        logger.info(f"User {owner.username} created post {created.id}")
        return created

    def update_post(self, post_id: int, payload: Payload) -> Post:
        """
        Replace likes and any other mutable fields present in the payload.

        Raises:
            NotFound: If the post does not exist
            ValidationError: If a present field is invalid
        """
        data = _parse(PostUpdate, payload)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in REQUIRED_FIELDS
        }
        return self.posts.update(post_id, changes)

    def delete_post(self, auth_token: Optional[str], post_id: int) -> None:
        """
        Delete a post on behalf of its owner.

        Raises:
            Unauthorized: If the token is missing or invalid
            NotFound: If the post does not exist
            Forbidden: If the caller does not own the post
        """
        user_id = self.sessions.validate(auth_token)
        post = self.posts.get(post_id)

        if post.owner_id != user_id:
            logger.warning(f"User id={user_id} tried to delete post {post_id} owned by id={post.owner_id}")
            raise Forbidden("only the owner can delete a post")

        self.posts.delete(post_id)
        logger.info(f"User id={user_id} deleted post {post_id}")
