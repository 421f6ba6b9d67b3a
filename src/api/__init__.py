"""
HTTP API Module.

FastAPI application factory and routes.
"""

from src.api.app import create_app
from src.api.routes import router

__all__ = ["create_app", "router"]
