"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError

from tldr import __version__
from tldr.common.logging_config import get_logger
from .api import api_router
from .api.routes import envelope_response
from .web import web_router
from .middleware.logging import LoggingMiddleware
from .middleware.request_id import RequestIDMiddleware


API_PREFIX = "/api"


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed API bodies get the usual envelope with a 500, like any other failure."""
    if not request.url.path.startswith(API_PREFIX):
        return await request_validation_exception_handler(request, exc)
    
    request.app.state.logger.warning(f"Malformed request body on {request.url.path}: {exc.errors()}")
    return envelope_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        f"Malformed request body: {exc.errors()}",
    )


def create_app(
    store_instance,
    service_instance,
    config,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        store_instance: Mapping store instance
        service_instance: Service instance
        config: Configuration instance
        logger: Optional logger (defaults to tldr.web)
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="tldr",
        description="URL shortening service",
        version=__version__,
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        openapi_url=f"{API_PREFIX}/openapi.json",
    )
    
    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or get_logger("web")
    
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    
    # Last added runs first, so request ids exist by the time requests are logged
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    
    # API first so /api/... is never taken for a token
    app.include_router(api_router, prefix=API_PREFIX, tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app
