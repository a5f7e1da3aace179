"""
Post model.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from blogapi.db.base import BaseModel


class Post(BaseModel):
    """
    Database model for storing blog posts.

    ``slug`` is unique across all posts and is the public identifier used
    in URLs. ``version`` is the ORM version counter: every UPDATE checks
    and increments it, so concurrent writers cannot silently overwrite
    each other.
    """

    __tablename__ = "posts"

    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version = Column(Integer, nullable=False)

    author = relationship("User", back_populates="posts", lazy="noload")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"Post(slug={self.slug})"
