"""
User database model.

Credentials for the people who own blog posts. The password is only ever
stored as a bcrypt hash.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship

from blogapi.shared.database import Base

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 3


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    name = Column(String(200))
    password_hash = Column(String(200), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    # Derived from Post.owner_id, which stays the only source of truth
    # for ownership. Kept for display (GET /users).
    posts = relationship("Post", back_populates="owner", order_by="Post.id")

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
