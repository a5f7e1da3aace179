"""
User model.
"""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from blogapi.db.base import BaseModel


class User(BaseModel):
    """
    Database model for storing users.

    Only the password hash is stored; hashing happens in the user service
    before the row is persisted.
    """

    __tablename__ = "users"

    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)

    role = relationship("Role", back_populates="users", lazy="selectin")
    posts = relationship(
        "Post", back_populates="author", lazy="noload", passive_deletes=True
    )

    @property
    def role_name(self) -> str:
        return self.role.name if self.role is not None else ""

    def __repr__(self):
        return f"User(username={self.username})"
