"""
Blog post database model.

Every post is bound to exactly one owner at creation time.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from blogapi.shared.database import Base
from blogapi.users.models import User

# Range of a 32-bit INTEGER column (PostgreSQL); larger ids can never exist
MAX_POST_ID = 2**31 - 1


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String(300), nullable=False)
    author = Column(String(200))
    url = Column(String(500), nullable=False)
    likes = Column(Integer, nullable=False, default=0)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship(User, back_populates="posts")

    def __repr__(self) -> str:
        return f"<Post id={self.id} title={self.title!r} owner_id={self.owner_id}>"
