"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, Form, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from tldr.common.url_builder import build_base_url, build_short_url
from tldr.exceptions import (
    InvalidURLError,
    MappingInvalidError,
    MappingNotFoundError,
    TLDRError,
)

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


def _path_prefix_from_request(request: Request) -> str:
    """Path prefix from X-Forwarded-Prefix (set by a proxy that strips it). Leading slash, no trailing."""
    prefix = (request.headers.get("x-forwarded-prefix") or "").strip().strip("/")
    return "/" + prefix if prefix else ""


def _render_index(request: Request, status_code: int = 200, **context) -> HTMLResponse:
    context.setdefault("prefix", _path_prefix_from_request(request))
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the form."""
    return _render_index(request)


@router.post("/", response_class=HTMLResponse, include_in_schema=False)
async def create_short_url_web(request: Request, url: str = Form("")):
    """Handle form submission and show the resulting short URL."""
    service = request.app.state.service
    config = request.app.state.config
    logger = request.app.state.logger
    
    try:
        mapping = await service.mint(url)
    except InvalidURLError as e:
        return _render_index(request, status.HTTP_400_BAD_REQUEST, url=url, error_message=str(e))
    except TLDRError as e:
        logger.error(f"Failed to create short for {url!r}: {e}")
        return _render_index(request, status.HTTP_500_INTERNAL_SERVER_ERROR, url=url, error_message=str(e))
    
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    short_url = build_short_url(mapping.short, base_url + _path_prefix_from_request(request))
    
    return _render_index(request, short_url=short_url, original_url=mapping.url)


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service
    
    health = await service.health_check()
    
    if health["overall"]:
        return {"status": "healthy"}
    else:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )


@router.get("/{short}", include_in_schema=False)
async def redirect_to_url(request: Request, short: str):
    """Redirect to the original URL."""
    service = request.app.state.service
    
    try:
        mapping = await service.resolve(short)
    except (MappingNotFoundError, MappingInvalidError) as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_404_NOT_FOUND)
    except TLDRError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    
    return RedirectResponse(url=mapping.url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
