"""FastAPI web application for tldr."""

from .app_factory import create_app

__all__ = ["create_app"]
