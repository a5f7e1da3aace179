"""
Use cases behind the HTTP routes.
"""

from blogapi.services.posts import POST_QUERY, PostService
from blogapi.services.roles import ROLE_QUERY, RoleService
from blogapi.services.users import USER_QUERY, UserService

__all__ = [
    "POST_QUERY",
    "PostService",
    "ROLE_QUERY",
    "RoleService",
    "USER_QUERY",
    "UserService",
]
