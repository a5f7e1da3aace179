"""
HTTP routes of the blog API.

``api_router`` groups every resource router; the application factory
mounts it under ``settings.API_PREFIX``.
"""

from fastapi import APIRouter

from blogapi.routes.auth import router as auth_router
from blogapi.routes.posts import router as posts_router
from blogapi.routes.roles import router as roles_router
from blogapi.routes.users import router as users_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(posts_router)
api_router.include_router(roles_router)
api_router.include_router(users_router)

__all__ = ["api_router"]
