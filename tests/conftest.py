"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from shortener.config import Config
from shortener.lib.common.logging_config import setup_logging
from shortener.lib.database.memory import MemoryUrlStore
from shortener.lib.registry import UrlRegistry
from shortener.lib.shortcode import ShortCodeGenerator
from shortener.web_app import create_app


class ScriptedGenerator(ShortCodeGenerator):
    """Hands out the given short codes first, then unique counter-based ones."""

    def __init__(self, tokens=()):
        super().__init__()
        self.tokens = list(tokens)
        self.counter = 0

    def token_for(self, identifier):
        if self.tokens:
            return self.tokens.pop(0)
        self.counter += 1
        return f"{self.counter:012x}"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger):
    """Create in-memory store."""
    return MemoryUrlStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator()


@pytest.fixture
def scripted_generator():
    """Factory for generators with predetermined short codes."""
    return ScriptedGenerator


@pytest.fixture
async def registry(store, short_code_generator, logger):
    """Create registry instance."""
    registry = UrlRegistry(
        store=store,
        cache=None,
        short_code_generator=short_code_generator,
        logger=logger,
    )
    yield registry
    await registry.close()


@pytest.fixture
def config():
    """Configuration for tests (in-memory store, no cache)."""
    return Config(database_url="memory://", redis_url=None)


@pytest.fixture
def make_client(config):
    """Factory for HTTP clients bound to an app around a given registry."""
    def _make_client(registry):
        app = create_app(config=config, registry=registry)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
    return _make_client


@pytest.fixture
async def client(make_client, registry):
    """Create test client."""
    async with make_client(registry) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
