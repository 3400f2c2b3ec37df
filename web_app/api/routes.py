"""API routes implementation."""

from typing import List, Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from tldr.database.models import Mapping
from tldr.exceptions import (
    InvalidURLError,
    MappingInvalidError,
    MappingNotFoundError,
    TLDRError,
)
from .schemas import Envelope, HealthResponse, MappingPayload, ShortenRequest

router = APIRouter()

OK_MESSAGE = "Ok"
NOT_VALID_MESSAGE = "URL is not valid"
NOT_VALID_STATUS = 422


def make_envelope(code: int, message: str, mapping: Optional[Mapping] = None) -> Envelope:
    """Build the response envelope for a status code and optional mapping."""
    data = MappingPayload.from_mapping(mapping) if mapping is not None else None
    return Envelope(status=code, message=message, data=data)


def envelope_response(code: int, message: str, mapping: Optional[Mapping] = None) -> JSONResponse:
    """Envelope as a JSON response whose HTTP status matches the envelope status."""
    envelope = make_envelope(code, message, mapping)
    return JSONResponse(status_code=code, content=envelope.model_dump())


@router.get(
    "/",
    response_model=List[Envelope],
    responses={500: {"model": Envelope, "description": "Storage error"}},
    summary="List all mappings",
    description="Return every mapping, each annotated with 200 Ok or 422 URL is not valid.",
)
async def list_mappings(request: Request):
    """List all mappings with their status."""
    service = request.app.state.service
    
    try:
        mappings = await service.list_all()
    except TLDRError as e:
        return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    
    return [
        make_envelope(status.HTTP_200_OK, OK_MESSAGE, m)
        if m.valid
        else make_envelope(NOT_VALID_STATUS, NOT_VALID_MESSAGE, m)
        for m in mappings
    ]


@router.post(
    "/",
    response_model=Envelope,
    responses={500: {"model": Envelope, "description": "Invalid URL or storage error"}},
    summary="Create short URL",
    description="Mint a new token for the given URL.",
)
async def create_mapping(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    logger = request.app.state.logger
    
    try:
        mapping = await service.mint(body.url)
    except InvalidURLError as e:
        logger.warning(f"Rejected URL {body.url!r}: {e}")
        return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except TLDRError as e:
        logger.error(f"Failed to create short for {body.url!r}: {e}")
        return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    
    return envelope_response(status.HTTP_200_OK, OK_MESSAGE, mapping)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service
    
    health = await service.health_check()
    
    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/{short:path}",
    response_model=Envelope,
    responses={
        404: {"model": Envelope, "description": "Short not found"},
        422: {"model": Envelope, "description": "Mapping is not valid"},
        500: {"model": Envelope, "description": "Storage error"},
    },
    summary="Resolve short URL",
    description="Return the mapping behind a token.",
)
async def resolve_mapping(request: Request, short: str):
    """Resolve a token to its mapping."""
    service = request.app.state.service
    
    try:
        mapping = await service.resolve(short)
    except MappingNotFoundError as e:
        return envelope_response(status.HTTP_404_NOT_FOUND, str(e))
    except MappingInvalidError:
        return envelope_response(NOT_VALID_STATUS, NOT_VALID_MESSAGE)
    except TLDRError as e:
        return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    
    return envelope_response(status.HTTP_200_OK, OK_MESSAGE, mapping)
