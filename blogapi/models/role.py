"""
Role model.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from blogapi.db.base import BaseModel


class Role(BaseModel):
    """
    Database model for storing roles.

    A role names a set of privileges; users reference exactly one role.
    """

    __tablename__ = "roles"

    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(255), nullable=True)

    users = relationship(
        "User", back_populates="role", lazy="noload", passive_deletes=True
    )

    def __repr__(self):
        return f"Role(name={self.name})"
