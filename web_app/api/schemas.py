"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from tldr.database.models import Mapping


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    url: str = Field(..., description="The URL to shorten; https:// is prepended if no http(s) scheme is given")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "example-domain.com"},
            ]
        }
    }


class MappingPayload(BaseModel):
    """A token -> URL mapping."""
    
    url: str = Field(..., description="Destination URL")
    short: str = Field(..., description="Short token")
    valid: bool = Field(..., description="Whether the mapping may be used")
    
    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "MappingPayload":
        return cls(url=mapping.url, short=mapping.short, valid=mapping.valid)


class Envelope(BaseModel):
    """Response wrapper used by every API endpoint."""
    
    status: int = Field(..., description="Status code, same as the HTTP status")
    message: str = Field(..., description="Human-readable message")
    data: Optional[MappingPayload] = Field(None, description="The mapping, null on errors")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": 200,
                    "message": "Ok",
                    "data": {
                        "url": "https://example.com/very/long/path",
                        "short": "QwErTyUiOpAsDfGhJk",
                        "valid": True,
                    },
                },
                {
                    "status": 404,
                    "message": "No URL found for short 'QwErTyUiOpAsDfGhJk'.",
                    "data": None,
                },
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")
