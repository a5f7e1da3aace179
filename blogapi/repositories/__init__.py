"""
Resource repositories.
"""

from blogapi.repositories.posts import PostRepository
from blogapi.repositories.roles import RoleRepository
from blogapi.repositories.users import UserRepository

__all__ = ["PostRepository", "RoleRepository", "UserRepository"]
