"""Configuration management for tldr."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""
    
    # Database settings
    database_url: str = Field(
        default="sqlite:///data/tldr.db",
        description="Mapping store location (sqlite:///path or postgresql://...)"
    )
    
    create_tables: bool = Field(
        default=True,
        description="Create the url table on startup if it does not exist"
    )
    
    db_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the PostgreSQL connection pool"
    )
    
    db_timeout_seconds: int = Field(
        default=30,
        ge=1,
        description="Database connection and command timeout in seconds"
    )
    
    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=3000,
        description="Port to listen on"
    )
    
    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. 1 = single process (async handles many connections); >1 = multi-process."
    )
    
    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL for generating short URLs when the request does not tell"
    )
    
    # Token settings
    token_length: int = Field(
        default=18,
        ge=1,
        description="Length of generated tokens"
    )
    
    max_mint_attempts: int = Field(
        default=10,
        ge=1,
        description="Maximum candidate tokens tried before giving up on a mint"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
