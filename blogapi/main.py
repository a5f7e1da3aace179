"""
ASGI entry point.

Run with ``uvicorn blogapi.main:app``. Settings are chosen by ``APP_ENV``.
"""

from blogapi.factory import create_app

app = create_app()
