"""Helpers for building the public short URL of a token."""

from typing import Dict, Optional


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the public base URL of the service.
    
    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host (set by a reverse proxy)
    2. Request scheme + host
    3. Configured base URL
    
    Args:
        headers: Request headers
        fallback_base_url: Base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request Host header
        
    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    proto = lowered.get("x-forwarded-proto")
    host = lowered.get("x-forwarded-host")
    
    if proto and host:
        return f"{proto}://{host}"
    
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    
    return fallback_base_url.rstrip("/")


def build_short_url(short: str, base_url: str) -> str:
    """Join a base URL and a token into the full short URL."""
    return f"{base_url.rstrip('/')}/{short}"
