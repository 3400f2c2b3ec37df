"""Destination URL normalization and validation."""

import re
from urllib.parse import urlparse

from ..exceptions import InvalidURLError


MAX_URL_LENGTH = 2048
DEFAULT_SCHEME = "https://"

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_FORBIDDEN_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")


def has_http_scheme(url: str) -> bool:
    """Return True if the URL starts with http:// or https://."""
    return bool(_SCHEME_RE.match(url))


def normalize_url(raw: str) -> str:
    """Normalize and validate a destination URL.
    
    Input without an http:// or https:// prefix gets https:// prepended
    instead of being rejected. That also applies to other schemes, so
    ``ftp://host`` becomes ``https://ftp://host``.
    
    Args:
        raw: The URL as submitted by the caller
        
    Returns:
        The normalized URL
        
    Raises:
        InvalidURLError: If the URL cannot be turned into a valid http(s) URL
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidURLError("URL is required")
    
    url = raw.strip()
    
    if len(url) > MAX_URL_LENGTH:
        raise InvalidURLError(f"URL is too long (max {MAX_URL_LENGTH} characters)")
    
    if not has_http_scheme(url):
        url = DEFAULT_SCHEME + url
    
    if _FORBIDDEN_CHARS_RE.search(url):
        raise InvalidURLError(f"Invalid URL '{url}': contains whitespace or control characters")
    
    try:
        parsed = urlparse(url)
        # Accessing .port validates it
        parsed.port
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL '{url}': {e}") from e
    
    if parsed.scheme.lower() not in ("http", "https"):
        raise InvalidURLError(f"Invalid URL '{url}': must use http or https protocol")
    
    if not parsed.hostname:
        raise InvalidURLError(f"Invalid URL '{url}': missing host")
    
    return url
