"""
blogapi - a blog REST API built on FastAPI and SQLAlchemy.

Posts, users and roles are exposed as CRUD resources with JWT
authentication. List endpoints share one search/sort/pagination layer.

Usage:
    from blogapi import create_app

    app = create_app()
"""

__version__ = "0.1.0"

from blogapi.factory import create_app

__all__ = ["create_app", "__version__"]
