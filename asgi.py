"""
asgi.py -- Application assembly for AuthDemo.

Builds the app from environment settings. Importing this module fails when
JWT_SECRET is not configured, so the server never starts without it.

Run with:  uvicorn asgi:app --reload
"""

from api.main import create_app

app = create_app()
