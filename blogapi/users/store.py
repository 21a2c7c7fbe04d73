"""
Credential store

Persists user records. Password hashes never leave this module except to the
authenticator that verifies them.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from blogapi.shared.errors import ValidationError
from blogapi.shared.passwords import get_password_hash
from blogapi.users.models import User

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> Optional[User]:
        """Exact, case-sensitive lookup. Empty usernames never match."""
        if not username:
            return None
        return self.db.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def list_users(self) -> list[User]:
        return (
            self.db.query(User)
            .options(selectinload(User.posts))
            .order_by(User.id.asc())
            .all()
        )

    def create(self, username: str, password: str, name: Optional[str] = None) -> User:
        """
        Register a new user with a hashed password.

        Raises:
            ValidationError: If the username is already taken
        """
        if self.find_by_username(username) is not None:
            raise ValidationError("username must be unique")

        user = User(username=username, name=name, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.db.rollback()
            raise ValidationError("username must be unique")
        self.db.refresh(user)
        logger.info(f"Registered user {user.username} (id={user.id})")
        return user
