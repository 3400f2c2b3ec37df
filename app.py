#!/usr/bin/env python3
"""
Main entry point for the tldr URL shortener service.

Concurrency: requests are handled concurrently via async I/O (FastAPI on
uvicorn) against one shared mapping store. Set WORKERS > 1 for multi-process
scaling across CPU cores (each worker opens its own store).

Usage:
    python app.py

Environment variables:
    DATABASE_URL - Mapping store (sqlite:///data/tldr.db or postgresql://...)
    CREATE_TABLES - Create the url table on startup (default true)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    TOKEN_LENGTH - Length of generated tokens (default 18)
    MAX_MINT_ATTEMPTS - Candidate tokens tried per mint (default 10)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from tldr.database import create_store
from tldr.service import ShortenerService
from tldr.tokens import TokenGenerator
from tldr.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store and build the service on startup; close it on shutdown."""
    config = app.state.config
    logger = app.state.logger
    
    logger.info("Starting tldr service...")
    
    logger.info(f"Opening mapping store at {config.database_url}")
    store = create_store(
        config.database_url,
        create_tables=config.create_tables,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        logger=logger,
    )
    # The service cannot run without its store, so a failure here aborts startup
    await store.initialize()
    
    service = ShortenerService(
        store=store,
        token_generator=TokenGenerator(default_length=config.token_length),
        logger=logger,
        max_mint_attempts=config.max_mint_attempts,
    )
    
    app.state.store = store
    app.state.service = service
    
    logger.info("Service started successfully")
    
    yield
    
    logger.info("Shutting down tldr service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()
    
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    
    logger.info("tldr URL shortener")
    logger.info(f"Configuration: {config.model_dump()}")
    
    # Store and service are created in the lifespan
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
        logger=logger,
    )
    app.router.lifespan_context = lifespan
    
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )
    
    server = uvicorn.Server(uvicorn_config)
    
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True
    
    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)
    
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
