"""
Post repository

Persistence for blog posts. Reads join in the owning user so every post comes
back with its owner summary; nothing about the owner is copied onto the post.
Each write is a single statement, so it is atomic at the database level.
"""
from typing import Any, Optional

from sqlalchemy.orm import Session, joinedload

from blogapi.posts.models import MAX_POST_ID, Post
from blogapi.shared.errors import NotFound

UPDATABLE_FIELDS = ("title", "author", "url", "likes")


def _storable(post_id: int) -> bool:
    return -MAX_POST_ID - 1 <= post_id <= MAX_POST_ID


class PostRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Post).options(joinedload(Post.owner))

    def find_all(self) -> list[Post]:
        """All posts in insertion order."""
        return self._query().order_by(Post.id.asc()).all()

    def find_by_id(self, post_id: int) -> Optional[Post]:
        if not _storable(post_id):
            return None
        return self._query().filter(Post.id == post_id).first()

    def get(self, post_id: int) -> Post:
        """
        Like find_by_id, but absent posts are an error.

        Raises:
            NotFound: If no post has this id
        """
        post = self.find_by_id(post_id)
        if post is None:
            raise NotFound("post not found")
        return post

    def count(self) -> int:
        return self.db.query(Post).count()

    def create(self, post: Post) -> Post:
        """Persist a new post. The database assigns the id."""
        self.db.add(post)
        self.db.commit()
        return self.get(post.id)

    def update(self, post_id: int, changes: dict[str, Any]) -> Post:
        """
        Replace the given fields of a post in one UPDATE statement.

        Concurrent updates are last-write-wins; no read-modify-write happens.

        Raises:
            ValueError: If a field outside UPDATABLE_FIELDS is given
            NotFound: If no post has this id
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        if not _storable(post_id):
            raise NotFound("post not found")

        if changes:
            updated = (
                self.db.query(Post)
                .filter(Post.id == post_id)
                .update(changes, synchronize_session=False)
            )
            self.db.commit()
            if not updated:
                raise NotFound("post not found")
        return self.get(post_id)

    def update_likes(self, post_id: int, likes: int) -> Post:
        return self.update(post_id, {"likes": likes})

    def delete(self, post_id: int) -> None:
        """
        Delete a post in one DELETE statement.

        Raises:
            NotFound: If no post has this id (including one deleted concurrently)
        """
        if not _storable(post_id):
            raise NotFound("post not found")
        deleted = (
            self.db.query(Post)
            .filter(Post.id == post_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if not deleted:
            raise NotFound("post not found")
