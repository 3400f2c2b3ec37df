"""Common utilities for tldr."""

from .validators import normalize_url, has_http_scheme
from .url_builder import build_base_url, build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "normalize_url",
    "has_http_scheme",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
