"""
Middleware for the blog API.

Currently only CORS, configured from settings.MIDDLEWARE_CORS_OPTIONS.
"""

from .cors import DEFAULT_CORS_OPTIONS, add_cors_middleware
from .manager import setup_middlewares

__all__ = ["DEFAULT_CORS_OPTIONS", "add_cors_middleware", "setup_middlewares"]
