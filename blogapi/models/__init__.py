"""
Models package for the application.

Importing this package registers every table on the shared metadata.
"""

from blogapi.models.post import Post
from blogapi.models.role import Role
from blogapi.models.user import User

__all__ = ["Post", "Role", "User"]
