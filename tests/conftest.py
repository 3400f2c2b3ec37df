"""Pytest configuration and fixtures."""

import pytest
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import asyncpg
from httpx import ASGITransport, AsyncClient

from config import Config
from tldr.database.sqlite import SQLiteMappingStore
from tldr.service import ShortenerService
from tldr.tokens import TokenGenerator
from tldr.common.logging_config import setup_logging
from web_app import create_app


class ScriptedTokenGenerator(TokenGenerator):
    """Token generator that hands out a fixed sequence of tokens."""
    
    def __init__(self, tokens, default_length: int = TokenGenerator.DEFAULT_LENGTH):
        super().__init__(default_length=default_length)
        self.tokens = list(tokens)
        self.calls = 0
    
    def generate(self, length=None):
        token = self.tokens[self.calls]
        self.calls += 1
        return token


class FakePostgresConnection:
    """Stands in for an asyncpg connection; enforces a unique short like the real table."""
    
    def __init__(self, error=None, blind_lookups=False):
        self.rows = {}
        self.error = error
        self.blind_lookups = blind_lookups
    
    async def execute(self, query, *args):
        if self.error is not None:
            raise self.error
        if query.lstrip().startswith("INSERT"):
            url, short, valid = args
            if short in self.rows:
                raise asyncpg.UniqueViolationError(
                    'duplicate key value violates unique constraint "url_short_key"'
                )
            self.rows[short] = {"url": url, "short": short, "valid": valid}
    
    async def fetchrow(self, query, *args):
        if self.error is not None:
            raise self.error
        if self.blind_lookups:
            return None
        return self.rows.get(args[0])
    
    async def fetch(self, query, *args):
        if self.error is not None:
            raise self.error
        return list(self.rows.values())


def fake_connection_factory(conn):
    """Replacement for PostgresMappingStore._get_connection that always yields conn."""
    @asynccontextmanager
    async def _get_connection():
        yield conn
    return _get_connection


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(tmp_path, logger) -> AsyncGenerator[SQLiteMappingStore, None]:
    """Create an initialized SQLite store in a temporary directory."""
    store = SQLiteMappingStore(
        db_config=str(tmp_path / "tldr.db"),
        logger=logger,
    )
    await store.initialize()
    
    yield store
    
    await store.close()


@pytest.fixture
def token_generator():
    """Create token generator."""
    return TokenGenerator()


@pytest.fixture
def service(store, token_generator, logger) -> ShortenerService:
    """Create service instance."""
    return ShortenerService(
        store=store,
        token_generator=token_generator,
        logger=logger,
    )


@pytest.fixture
def config(tmp_path):
    """Create test configuration."""
    return Config(
        database_url=f"sqlite:///{tmp_path / 'tldr.db'}",
        base_url="http://testserver",
    )


@pytest.fixture
def app(store, service, config, logger):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
