"""Core business logic for the tldr URL shortener."""

from .tokens import TokenGenerator
from .service import ShortenerService

__version__ = "1.0.0"

__all__ = ["TokenGenerator", "ShortenerService"]
